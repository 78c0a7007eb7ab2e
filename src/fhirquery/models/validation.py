"""クエリ検証結果のデータモデル。"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ValidationError(BaseModel):
    """クエリを無効にする致命的な検証エラー。"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    message: str
    position: int | None = None
    parameter: str | None = None


class ValidationWarning(BaseModel):
    """クエリの有効性に影響しない注意喚起。"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["warning"] = "warning"
    message: str
    position: int | None = None
    parameter: str | None = None


class ParsedParameter(BaseModel):
    """分解済みの検索パラメータ。

    valueは常にデコード済みの値。chained_pathは存在する場合は空でなく、
    先頭要素は大文字始まりのリソース型修飾子であることがある。
    """

    model_config = ConfigDict(frozen=True)

    name: str
    modifier: str | None = None
    chained_path: list[str] | None = None
    value: str
    prefix: str | None = None


class ParsedQuery(BaseModel):
    """クエリ全体の分解結果。"""

    model_config = ConfigDict(frozen=True)

    resource_type: str | None = None
    resource_id: str | None = None
    version_id: str | None = None
    parameters: list[ParsedParameter] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """クエリ検証の結果。validはerrorsから導出される。"""

    model_config = ConfigDict(frozen=True)

    errors: list[ValidationError] = Field(default_factory=list)
    warnings: list[ValidationWarning] = Field(default_factory=list)
    parsed: ParsedQuery | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        return not self.errors


class ValidatorOptions(BaseModel):
    """バリデータの構築オプション。

    strict_modeは予約済みのフラグで、現時点では検証ルールに影響しない。
    """

    strict_mode: bool = False
    custom_resource_types: list[str] = Field(default_factory=list)
    custom_modifiers: list[str] = Field(default_factory=list)
