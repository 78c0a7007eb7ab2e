"""テスト共通フィクスチャ。"""

from pathlib import Path

import pytest

from fhirquery.config import ServerConfig
from fhirquery.services.query import QueryService
from fhirquery.validators.query import FhirQueryValidator


@pytest.fixture
def config_dir() -> Path:
    """設定ファイルディレクトリ。"""
    return Path(__file__).parent.parent / "config"


@pytest.fixture
def validator() -> FhirQueryValidator:
    """既定の語彙を持つテスト用FhirQueryValidator。"""
    return FhirQueryValidator()


@pytest.fixture
def query_service(config_dir: Path) -> QueryService:
    """テスト用QueryService。"""
    return QueryService(config_dir=config_dir)


@pytest.fixture
def server_config(config_dir: Path) -> ServerConfig:
    """テスト用ServerConfig。"""
    return ServerConfig(config_dir=config_dir)
