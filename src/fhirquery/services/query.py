"""クエリ検証とバリデータ語彙の管理を行うサービス。"""

import logging
from pathlib import Path
from typing import Any

from fhirquery.models.validation import ValidationResult, ValidatorOptions
from fhirquery.validators.query import FhirQueryValidator
from fhirquery.validators.vocabulary import (
    DEFAULT_MODIFIERS,
    SPECIAL_PARAMETERS,
    SearchVocabulary,
    load_vocabulary_file,
)

logger = logging.getLogger(__name__)


class QueryService:
    """設定ディレクトリの語彙定義を反映したバリデータを保持し、検証を行う。"""

    def __init__(self, config_dir: Path, options: ValidatorOptions | None = None) -> None:
        self._config_dir = config_dir
        self._options = options or ValidatorOptions()
        self._validator: FhirQueryValidator | None = None

    def _get_validator(self) -> FhirQueryValidator:
        """バリデータを初回アクセス時に構築する。

        Raises:
            VocabularyFileError: 語彙定義ファイルが不正な場合。
        """
        if self._validator is not None:
            return self._validator

        resource_types, modifiers = load_vocabulary_file(self._config_dir)
        vocabulary = SearchVocabulary()
        vocabulary.add_resource_types(*resource_types)
        vocabulary.add_modifiers(*modifiers)
        self._validator = FhirQueryValidator(self._options, vocabulary=vocabulary)
        logger.info("Query validator ready (config_dir=%s, strict_mode=%s)", self._config_dir, self._options.strict_mode)
        return self._validator

    def validate(self, query: str) -> ValidationResult:
        """クエリ文字列を検証する。"""
        return self._get_validator().validate(query)

    def validate_many(self, queries: list[str]) -> list[ValidationResult]:
        """複数のクエリ文字列を順に検証する。"""
        validator = self._get_validator()
        return [validator.validate(q) for q in queries]

    def is_valid(self, query: str) -> bool:
        return self._get_validator().is_valid(query)

    def is_valid_resource_type(self, name: str) -> bool:
        return self._get_validator().is_valid_resource_type(name)

    def is_valid_modifier(self, name: str) -> bool:
        return self._get_validator().is_valid_modifier(name)

    def add_resource_types(self, names: list[str]) -> list[str]:
        """リソース型を追加し、追加後のリソース型一覧を返す。"""
        validator = self._get_validator().add_resource_types(*names)
        return sorted(validator.vocabulary.resource_types)

    def add_modifiers(self, names: list[str]) -> list[str]:
        """修飾子を追加し、追加後の修飾子一覧を返す。"""
        validator = self._get_validator().add_modifiers(*names)
        return sorted(validator.vocabulary.modifiers)

    def describe_vocabulary(self) -> dict[str, Any]:
        """現在の語彙（リソース型、修飾子、特殊パラメータ）を返す。"""
        validator = self._get_validator()
        return {
            "strict_mode": validator.strict_mode,
            "resource_types": sorted(validator.vocabulary.resource_types),
            "modifiers": sorted(validator.vocabulary.modifiers),
            "modifier_categories": {k: list(v) for k, v in DEFAULT_MODIFIERS.items()},
            "special_parameters": list(SPECIAL_PARAMETERS),
        }
