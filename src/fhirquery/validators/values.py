"""パラメータ値の検証ロジック。"""

import re
from dataclasses import dataclass

from fhirquery.models.validation import ValidationError, ValidationWarning
from fhirquery.validators.vocabulary import SUMMARY_VALUES, TOTAL_VALUES, VALUE_PREFIXES

_PREFIX_PATTERN = re.compile(rf"({'|'.join(VALUE_PREFIXES)})(.+)", re.DOTALL)
_INCLUDE_PATTERN = re.compile(r"([A-Z][a-zA-Z]+):([a-zA-Z][a-zA-Z0-9_-]*)(?::([A-Z][a-zA-Z]+))?")
_SORT_ITEM_PATTERN = re.compile(r"-?[a-zA-Z_][a-zA-Z0-9_.-]*")
_DIGITS_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ValueCheck:
    """値の検証結果。"""

    prefix: str | None = None
    error: ValidationError | None = None
    warning: ValidationWarning | None = None


def extract_prefix(value: str) -> str | None:
    """比較プレフィックス（gt, le など）を取り出す。後続文字が無い場合はNone。"""
    match = _PREFIX_PATTERN.fullmatch(value)
    return match.group(1) if match else None


def validate_value(
    name: str,
    value: str,
    modifier: str | None = None,
    *,
    position: int | None = None,
) -> ValueCheck:
    """パラメータ名と修飾子に応じて値を検証する。

    致命的なエラーは最初の1件のみ返す。`|` の多重使用は警告として扱い、
    以降のチェックは継続する。

    Args:
        name: パラメータの基本名。
        value: デコード済みの値。
        modifier: 末尾の修飾子。
        position: エラー位置として記録するクエリ内の文字位置。

    Returns:
        抽出したプレフィックス、エラー、警告。
    """
    if not value:
        return ValueCheck(error=_error(f"Parameter '{name}' requires a value", name, position))

    if modifier == "missing" and value not in ("true", "false"):
        return ValueCheck(
            error=_error(
                f"Parameter '{name}:missing' must have value 'true' or 'false', got: '{value}'",
                name,
                position,
            )
        )

    prefix = extract_prefix(value)

    warning = None
    if value.count("|") > 1:
        warning = ValidationWarning(
            message=f"Token value has multiple '|' separators: \"{value}\"",
            position=position,
            parameter=name,
        )

    error = _check_special_parameter(name, value, position)
    return ValueCheck(prefix=prefix, error=error, warning=warning)


def _check_special_parameter(name: str, value: str, position: int | None) -> ValidationError | None:
    """特殊パラメータ固有の値文法をチェックする。"""
    if name in ("_include", "_revinclude"):
        if not _INCLUDE_PATTERN.fullmatch(value):
            return _error(
                f"Invalid {name} format: '{value}'. Expected: ResourceType:searchParam[:targetType]",
                name,
                position,
            )

    elif name == "_sort":
        for item in value.split(","):
            if not _SORT_ITEM_PATTERN.fullmatch(item):
                return _error(f"Invalid _sort parameter: '{item}'", name, position)

    elif name in ("_count", "_offset"):
        if not _DIGITS_PATTERN.fullmatch(value):
            return _error(f"{name} must be a non-negative integer, got: '{value}'", name, position)

    elif name == "_summary":
        if value not in SUMMARY_VALUES:
            return _error(
                f"Invalid _summary value: '{value}'. Valid values: {', '.join(SUMMARY_VALUES)}",
                name,
                position,
            )

    elif name == "_total":
        if value not in TOTAL_VALUES:
            return _error(
                f"Invalid _total value: '{value}'. Valid values: {', '.join(TOTAL_VALUES)}",
                name,
                position,
            )

    return None


def _error(message: str, parameter: str, position: int | None) -> ValidationError:
    return ValidationError(message=message, parameter=parameter, position=position)
