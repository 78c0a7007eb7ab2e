"""split_parametersとdecode_componentのユニットテスト。"""

import pytest

from fhirquery.models.errors import PercentDecodingError
from fhirquery.parsing.tokenizer import Token, decode_component, split_parameters


class TestSplitParameters:
    def test_splits_on_ampersand(self) -> None:
        tokens = split_parameters("name=John&_count=10")
        assert [t.text for t in tokens] == ["name=John", "_count=10"]
        assert [t.start for t in tokens] == [0, 10]

    def test_empty_string(self) -> None:
        assert split_parameters("") == []

    def test_drops_empty_pieces(self) -> None:
        tokens = split_parameters("&a=1&&b=2&")
        assert tokens == [Token("a=1", 1), Token("b=2", 6)]

    def test_ampersand_inside_parentheses(self) -> None:
        tokens = split_parameters("_filter=(a eq 1&b eq 2)&x=1")
        assert [t.text for t in tokens] == ["_filter=(a eq 1&b eq 2)", "x=1"]

    def test_ampersand_inside_nested_brackets(self) -> None:
        tokens = split_parameters("q=[a&(b&c)]&x=1")
        assert [t.text for t in tokens] == ["q=[a&(b&c)]", "x=1"]

    def test_stray_closer_is_ordinary_character(self) -> None:
        tokens = split_parameters("a=)&b=1")
        assert [t.text for t in tokens] == ["a=)", "b=1"]

    def test_unclosed_opener_keeps_rest_together(self) -> None:
        tokens = split_parameters("a=(x&b=1")
        assert [t.text for t in tokens] == ["a=(x&b=1"]

    def test_restartable(self) -> None:
        assert split_parameters("a=(") == [Token("a=(", 0)]
        assert [t.text for t in split_parameters("a=1&b=2")] == ["a=1", "b=2"]


class TestDecodeComponent:
    def test_decodes_escapes(self) -> None:
        assert decode_component("John%20Smith") == "John Smith"
        assert decode_component("a%7Cb") == "a|b"

    def test_plus_is_not_space(self) -> None:
        assert decode_component("a+b") == "a+b"

    def test_utf8(self) -> None:
        assert decode_component("M%C3%BCller") == "Müller"

    @pytest.mark.parametrize("value", ["%zz", "abc%", "%4", "100%"])
    def test_malformed_escape(self, value: str) -> None:
        with pytest.raises(PercentDecodingError):
            decode_component(value)

    def test_invalid_utf8(self) -> None:
        with pytest.raises(PercentDecodingError) as exc_info:
            decode_component("%FF%FE")
        assert exc_info.value.value == "%FF%FE"
