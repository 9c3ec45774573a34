# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供环境隔离与 API 类型注册表/站点目录相关的通用 fixtures。
"""

import copy
from pathlib import Path

import pytest
import yaml

from relaydesk.services.providers.provider_registry import ProviderTypeRegistry, get_provider_registry
from relaydesk.services.sites.site_directory import SiteDirectory, get_site_directory
from relaydesk.settings import DEFAULT_PROVIDER_TYPES_CONFIG, DEFAULT_SITES_CONFIG


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - 避免开发者本机环境变量影响测试稳定性
    - 始终使用包内自带的 YAML 配置
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    for name in (
        "FLASK_DEBUG",
        "LOG_LEVEL",
        "ENABLE_DEBUG_LOG",
        "API_V1_DOCS_ENABLED",
        "PROVIDER_TYPES_CONFIG",
        "SITES_CONFIG",
        "UPSTREAM_DEBUG_PREVIEW_CHARS",
        "UPSTREAM_REQUEST_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


def _read_yaml(path: Path) -> dict:
    with path.open(encoding="utf-8") as buffer:
        return yaml.safe_load(buffer)


@pytest.fixture(scope="session")
def _raw_provider_types() -> dict:
    return _read_yaml(DEFAULT_PROVIDER_TYPES_CONFIG)


@pytest.fixture(scope="session")
def _raw_sites() -> dict:
    return _read_yaml(DEFAULT_SITES_CONFIG)


@pytest.fixture
def raw_provider_types_config(_raw_provider_types) -> dict:
    """内置 provider_types.yaml 的可修改副本."""
    return copy.deepcopy(_raw_provider_types)


@pytest.fixture
def raw_sites_config(_raw_sites) -> dict:
    """内置 sites.yaml 的可修改副本."""
    return copy.deepcopy(_raw_sites)


@pytest.fixture
def registry() -> ProviderTypeRegistry:
    return get_provider_registry()


@pytest.fixture
def directory() -> SiteDirectory:
    return get_site_directory()
