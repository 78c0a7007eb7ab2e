"""fhirqueryサーバーの設定管理。"""

from pathlib import Path

from pydantic_settings import BaseSettings

from fhirquery.models.validation import ValidatorOptions

_PACKAGE_ROOT = Path(__file__).parent
_REPO_ROOT = _PACKAGE_ROOT.parent.parent


class ServerConfig(BaseSettings):
    """サーバー設定。環境変数から読み込み可能。

    リスト型の項目は環境変数ではJSON配列で指定する
    （例: FHIRQUERY_CUSTOM_RESOURCE_TYPES='["MyResource"]'）。
    """

    model_config = {"env_prefix": "FHIRQUERY_"}

    config_dir: Path = _REPO_ROOT / "config"
    host: str = "0.0.0.0"
    port: int = 8000

    # バリデータ設定
    strict_mode: bool = False
    custom_resource_types: list[str] = []
    custom_modifiers: list[str] = []

    def validator_options(self) -> ValidatorOptions:
        """バリデータ構築用のオプションを返す。"""
        return ValidatorOptions(
            strict_mode=self.strict_mode,
            custom_resource_types=list(self.custom_resource_types),
            custom_modifiers=list(self.custom_modifiers),
        )
