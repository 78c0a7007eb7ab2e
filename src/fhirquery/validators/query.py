"""FHIR検索クエリ文字列の検証ロジック。"""

import logging

from fhirquery.models.errors import PercentDecodingError
from fhirquery.models.validation import (
    ParsedParameter,
    ParsedQuery,
    ValidationError,
    ValidationResult,
    ValidationWarning,
    ValidatorOptions,
)
from fhirquery.parsing.envelope import parse_envelope
from fhirquery.parsing.names import parse_parameter_name
from fhirquery.parsing.tokenizer import Token, decode_component, split_parameters
from fhirquery.validators.combinations import check_combinations
from fhirquery.validators.values import validate_value
from fhirquery.validators.vocabulary import SearchVocabulary

logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = (
    "Invalid query format. Expected format: /ResourceType, /ResourceType/id, or /ResourceType?param=value"
)


class FhirQueryValidator:
    """FHIR検索クエリ文字列を検証し、構造に分解する。

    受け付ける形式:
        - `/ResourceType?param=value`（検索）
        - `/ResourceType/id`（read）
        - `/ResourceType/id/_history/vid`（vread）
        - `ResourceType?param=value`、`/fhir/...`、`/fhir/r4/...`
        - `param=value`（パラメータ文字列のみ）

    不正な入力に対しても例外は送出せず、すべての問題を結果として返す。
    """

    def __init__(
        self,
        options: ValidatorOptions | None = None,
        *,
        vocabulary: SearchVocabulary | None = None,
    ) -> None:
        if options is None:
            options = ValidatorOptions()
        self._strict_mode = options.strict_mode
        self._vocabulary = vocabulary if vocabulary is not None else SearchVocabulary()
        self._vocabulary.add_resource_types(*options.custom_resource_types)
        self._vocabulary.add_modifiers(*options.custom_modifiers)

    @property
    def strict_mode(self) -> bool:
        """予約済み。現時点では検証ルールに影響しない。"""
        return self._strict_mode

    @property
    def vocabulary(self) -> SearchVocabulary:
        return self._vocabulary

    def validate(self, query: str) -> ValidationResult:
        """クエリ文字列を検証する。

        Args:
            query: 検証対象のクエリ文字列。

        Returns:
            エラー、警告、分解結果を含む検証結果。外形が不正な場合のみparsedはNone。
        """
        if not query or not query.strip():
            return ValidationResult(parsed=ParsedQuery())

        envelope = parse_envelope(query)
        if envelope is None:
            logger.debug("Rejected query with invalid format: %r", query)
            return ValidationResult(errors=[ValidationError(message=INVALID_FORMAT_MESSAGE, position=0)])

        errors: list[ValidationError] = []
        warnings: list[ValidationWarning] = []
        parameters: list[ParsedParameter] = []

        if envelope.resource_type and not self.is_valid_resource_type(envelope.resource_type):
            warnings.append(
                ValidationWarning(
                    message=(
                        f"Unknown resource type: '{envelope.resource_type}'. This may be valid for custom resources."
                    ),
                )
            )

        for token in split_parameters(envelope.query_string):
            parsed = self._parse_parameter(token, envelope.offset + token.start, errors, warnings)
            if parsed is not None:
                parameters.append(parsed)

        warnings.extend(check_combinations(parameters))

        result = ValidationResult(
            errors=errors,
            warnings=warnings,
            parsed=ParsedQuery(
                resource_type=envelope.resource_type,
                resource_id=envelope.resource_id,
                version_id=envelope.version_id,
                parameters=parameters,
            ),
        )
        logger.debug(
            "Validated query %r: %d errors, %d warnings, %d parameters",
            query,
            len(errors),
            len(warnings),
            len(parameters),
        )
        return result

    def is_valid(self, query: str) -> bool:
        return self.validate(query).valid

    def add_resource_types(self, *names: str) -> "FhirQueryValidator":
        """リソース型を追加する。参照先の型修飾子として修飾子にも追加される。"""
        self._vocabulary.add_resource_types(*names)
        logger.info("Added resource types: %s", ", ".join(names))
        return self

    def add_modifiers(self, *names: str) -> "FhirQueryValidator":
        self._vocabulary.add_modifiers(*names)
        logger.info("Added modifiers: %s", ", ".join(names))
        return self

    def is_valid_resource_type(self, name: str) -> bool:
        return self._vocabulary.has_resource_type(name)

    def is_valid_modifier(self, name: str) -> bool:
        return self._vocabulary.has_modifier(name)

    def _parse_parameter(
        self,
        token: Token,
        position: int,
        errors: list[ValidationError],
        warnings: list[ValidationWarning],
    ) -> ParsedParameter | None:
        """1つのパラメータ片を解析・検証する。

        名前の形式不正や未知の修飾子があっても、取り出せた部分から
        ParsedParameterを組み立てて返す。`=` を含まない片や名前が空の片はNone。
        """
        raw_name, sep, raw_value = token.text.partition("=")
        if not sep:
            errors.append(
                ValidationError(
                    message=f"Invalid parameter format: '{token.text}'. Expected format: name=value",
                    position=position,
                    parameter=token.text,
                )
            )
            return None

        if not raw_name:
            errors.append(ValidationError(message="Empty parameter name", position=position, parameter=token.text))
            return None

        name = parse_parameter_name(raw_name, self.is_valid_modifier)
        if name.error:
            errors.append(ValidationError(message=name.error, position=position, parameter=raw_name))

        try:
            value = decode_component(raw_value)
        except PercentDecodingError as e:
            errors.append(ValidationError(message=str(e), position=position, parameter=name.name))
            value = raw_value

        check = validate_value(name.name, value, name.modifier, position=position)
        if check.error:
            errors.append(check.error)
        if check.warning:
            warnings.append(check.warning)

        return ParsedParameter(
            name=name.name,
            modifier=name.modifier,
            chained_path=list(name.chained_path) if name.chained_path else None,
            value=value,
            prefix=check.prefix,
        )


fhir_query_validator = FhirQueryValidator()
"""デフォルトのバリデータインスタンス。"""


def validate_fhir_query(query: str) -> ValidationResult:
    """デフォルトのバリデータでクエリを検証する。"""
    return fhir_query_validator.validate(query)


def is_valid_fhir_query(query: str) -> bool:
    """デフォルトのバリデータでクエリが有効かを判定する。"""
    return fhir_query_validator.is_valid(query)
