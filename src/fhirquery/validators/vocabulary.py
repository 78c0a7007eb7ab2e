"""検索パラメータ語彙（リソース型・修飾子）の定義と管理。"""

import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from fhirquery.models.errors import VocabularyFileError

logger = logging.getLogger(__name__)

VOCABULARY_FILE_NAME = "search-vocabulary.yaml"

# パラメータ型ごとの修飾子
DEFAULT_MODIFIERS: dict[str, tuple[str, ...]] = {
    "string": ("exact", "contains", "missing", "text"),
    "token": ("missing", "text", "not", "of-type", "in", "not-in", "above", "below"),
    "reference": ("missing", "type", "identifier"),
    "date": ("missing",),
    "number": ("missing",),
    "quantity": ("missing",),
    "uri": ("missing", "above", "below"),
    "composite": ("missing",),
    "include": ("iterate", "recurse"),
}

VALUE_PREFIXES: tuple[str, ...] = ("eq", "ne", "gt", "lt", "ge", "le", "sa", "eb", "ap")

SPECIAL_PARAMETERS: tuple[str, ...] = (
    "_id", "_lastUpdated", "_tag", "_profile", "_security", "_text", "_content",
    "_list", "_has", "_type", "_query", "_filter",
    "_include", "_revinclude",
    "_sort", "_count", "_offset", "_total",
    "_summary", "_elements", "_contained", "_containedType",
    "_format", "_pretty",
)  # fmt: skip

# 繰り返し指定が正当なパラメータ（重複警告の対象外）
REPEATABLE_PARAMETERS: frozenset[str] = frozenset({"_include", "_revinclude", "_tag", "_security", "_profile"})

SUMMARY_VALUES: tuple[str, ...] = ("true", "false", "text", "data", "count")
TOTAL_VALUES: tuple[str, ...] = ("none", "estimate", "accurate")

DEFAULT_RESOURCE_TYPES: tuple[str, ...] = (
    "Patient", "Practitioner", "Organization", "Location", "Encounter",
    "Condition", "Observation", "Procedure", "MedicationRequest", "Medication",
    "DiagnosticReport", "CarePlan", "CareTeam", "Goal", "AllergyIntolerance",
    "Immunization", "DocumentReference", "Consent", "Coverage", "Claim",
    "Bundle", "Composition", "OperationOutcome", "CapabilityStatement",
    "StructureDefinition", "ValueSet", "CodeSystem", "ConceptMap",
    "Appointment", "Schedule", "Slot", "Task", "ServiceRequest",
    "Communication", "QuestionnaireResponse", "Questionnaire",
    "RelatedPerson", "Person", "Group", "Device", "Specimen",
    "FamilyMemberHistory", "RiskAssessment", "DetectedIssue",
    "EpisodeOfCare", "Flag", "List", "Basic", "Binary", "Media",
    "PractitionerRole", "HealthcareService", "Endpoint",
)  # fmt: skip


class SearchVocabulary:
    """認識済みリソース型と修飾子の集合（小文字で保持）。

    リソース型は参照先の型修飾子として修飾子集合にも登録される。
    書き込みは単一スレッドからのみ行う前提で、集合の更新と参照はロックで保護する。
    """

    def __init__(
        self,
        resource_types: Iterable[str] = DEFAULT_RESOURCE_TYPES,
        modifiers: Iterable[str] | None = None,
    ) -> None:
        if modifiers is None:
            modifiers = [m for group in DEFAULT_MODIFIERS.values() for m in group]
        self._lock = threading.Lock()
        self._resource_types: set[str] = {t.lower() for t in resource_types}
        self._modifiers: set[str] = {m.lower() for m in modifiers} | self._resource_types

    def add_resource_types(self, *names: str) -> None:
        with self._lock:
            for name in names:
                lower = name.lower()
                self._resource_types.add(lower)
                self._modifiers.add(lower)

    def add_modifiers(self, *names: str) -> None:
        with self._lock:
            self._modifiers.update(name.lower() for name in names)

    def has_resource_type(self, name: str) -> bool:
        with self._lock:
            return name.lower() in self._resource_types

    def has_modifier(self, name: str) -> bool:
        with self._lock:
            return name.lower() in self._modifiers

    @property
    def resource_types(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._resource_types)

    @property
    def modifiers(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._modifiers)


def load_vocabulary_file(config_dir: Path) -> tuple[list[str], list[str]]:
    """config_dir配下の語彙定義YAMLを読み込む。

    ファイルが存在しない場合は空の語彙を返す。

    Args:
        config_dir: 設定ファイルディレクトリ。

    Returns:
        (追加リソース型, 追加修飾子) のタプル。

    Raises:
        VocabularyFileError: YAMLが不正、または構造が想定と異なる場合。
    """
    vocabulary_file = config_dir / VOCABULARY_FILE_NAME
    if not vocabulary_file.exists():
        return [], []

    try:
        with open(vocabulary_file, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise VocabularyFileError(str(vocabulary_file), str(e)) from e

    if data is None:
        return [], []
    if not isinstance(data, dict):
        raise VocabularyFileError(str(vocabulary_file), "top-level mapping expected")

    resource_types = data.get("resource_types") or []
    if not isinstance(resource_types, list) or not all(isinstance(t, str) for t in resource_types):
        raise VocabularyFileError(str(vocabulary_file), "'resource_types' must be a list of strings")

    # modifiers はカテゴリ別のマッピングまたは単純なリスト
    raw_modifiers = data.get("modifiers") or []
    if isinstance(raw_modifiers, dict):
        groups = list(raw_modifiers.values())
    else:
        groups = [raw_modifiers]

    modifiers: list[str] = []
    for group in groups:
        if not isinstance(group, list) or not all(isinstance(m, str) for m in group):
            raise VocabularyFileError(str(vocabulary_file), "'modifiers' entries must be lists of strings")
        modifiers.extend(group)

    logger.info(
        "Loaded %d resource types and %d modifiers from %s",
        len(resource_types),
        len(modifiers),
        vocabulary_file,
    )
    return resource_types, modifiers
