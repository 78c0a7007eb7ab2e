"""検証結果データモデルのユニットテスト。"""

import pydantic
import pytest

from fhirquery.models.validation import (
    ParsedParameter,
    ParsedQuery,
    ValidationError,
    ValidationResult,
    ValidationWarning,
    ValidatorOptions,
)


class TestValidationResult:
    def test_valid_without_errors(self) -> None:
        result = ValidationResult(warnings=[ValidationWarning(message="w")], parsed=ParsedQuery())
        assert result.valid is True

    def test_invalid_with_errors(self) -> None:
        result = ValidationResult(errors=[ValidationError(message="e")])
        assert result.valid is False
        assert result.parsed is None

    def test_valid_cannot_be_set(self) -> None:
        result = ValidationResult(errors=[ValidationError(message="e")], valid=True)  # type: ignore[call-arg]
        assert result.valid is False

    def test_frozen(self) -> None:
        result = ValidationResult()
        with pytest.raises(pydantic.ValidationError):
            result.errors = [ValidationError(message="e")]  # type: ignore[misc]

    def test_dump_includes_valid(self) -> None:
        data = ValidationResult(parsed=ParsedQuery(resource_type="Patient")).model_dump()
        assert data["valid"] is True
        assert data["parsed"]["resource_type"] == "Patient"
        assert data["parsed"]["parameters"] == []

    def test_json_roundtrip(self) -> None:
        result = ValidationResult(
            errors=[ValidationError(message="bad", parameter="_count", position=9)],
            parsed=ParsedQuery(parameters=[ParsedParameter(name="_count", value="abc")]),
        )
        restored = ValidationResult.model_validate_json(result.model_dump_json())
        assert restored == result
        assert restored.valid is False


class TestIssues:
    def test_kinds(self) -> None:
        assert ValidationError(message="e").kind == "error"
        assert ValidationWarning(message="w").kind == "warning"

    def test_kind_is_fixed(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ValidationError(kind="warning", message="e")  # type: ignore[arg-type]

    def test_optional_fields(self) -> None:
        error = ValidationError(message="e")
        assert error.position is None
        assert error.parameter is None


class TestParsedParameter:
    def test_defaults(self) -> None:
        param = ParsedParameter(name="name", value="John")
        assert param.modifier is None
        assert param.chained_path is None
        assert param.prefix is None


class TestValidatorOptions:
    def test_defaults(self) -> None:
        options = ValidatorOptions()
        assert options.strict_mode is False
        assert options.custom_resource_types == []
        assert options.custom_modifiers == []
