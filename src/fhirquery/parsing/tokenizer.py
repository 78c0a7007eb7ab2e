"""パラメータ文字列の分割とパーセントデコード。"""

import re
from dataclasses import dataclass
from urllib.parse import unquote

from fhirquery.models.errors import PercentDecodingError

_OPENERS = frozenset("([")
_CLOSERS = frozenset(")]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class Token:
    """`name=value` 形式のパラメータ片と、パラメータ文字列内での開始位置。"""

    text: str
    start: int


def split_parameters(query_string: str) -> list[Token]:
    """パラメータ文字列を `&` で分割する。

    括弧（`(` `[`）の内側にある `&` では分割しない。
    対応の取れない閉じ括弧は通常の文字として扱い、深さは0未満にならない。
    空の断片は捨てる。

    Args:
        query_string: 先頭の `?` を除いたパラメータ文字列。

    Returns:
        出現順のトークンのリスト。
    """
    tokens: list[Token] = []
    depth = 0
    start = 0

    for i, char in enumerate(query_string):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            if depth > 0:
                depth -= 1
        elif char == "&" and depth == 0:
            if i > start:
                tokens.append(Token(query_string[start:i], start))
            start = i + 1

    if start < len(query_string):
        tokens.append(Token(query_string[start:], start))
    return tokens


def decode_component(value: str) -> str:
    """パーセントエンコードされた値をデコードする。`+` は空白として扱わない。

    Raises:
        PercentDecodingError: 不正なエスケープ、またはUTF-8として不正なバイト列の場合。
    """
    bad = _BAD_ESCAPE.search(value)
    if bad:
        raise PercentDecodingError(value, f"invalid escape at index {bad.start()}")
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError as e:
        raise PercentDecodingError(value, "escapes do not form valid UTF-8") from e
