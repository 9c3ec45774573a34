"""已知站点目录.

站点列表是静态数据, 启动时从 `sites.yaml` 加载并校验一次:
- 站点所属的 API 类型必须存在于注册表
- 每个 API 类型最多一个默认站点
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import lru_cache
from pathlib import Path

from relaydesk.errors import ConfigurationError
from relaydesk.schemas.yaml_configs import SitesConfigFile
from relaydesk.services.common.config_files import read_yaml_config, validate_config_payload
from relaydesk.services.providers.provider_registry import ProviderTypeRegistry, get_provider_registry
from relaydesk.settings import DEFAULT_SITES_CONFIG
from relaydesk.types.sites import SiteRecord
from relaydesk.utils.structlog_config import get_system_logger

logger = get_system_logger()

_CONFIG_NAME = "站点目录"


class SiteDirectory:
    """只读站点目录, 保持配置中的声明顺序."""

    def __init__(self, sites: Iterable[SiteRecord], registry: ProviderTypeRegistry) -> None:
        records = tuple(sites)
        defaults: dict[str, SiteRecord] = {}
        by_type: dict[str, list[SiteRecord]] = {}

        for record in records:
            if not registry.is_valid_provider_type(record.provider_type):
                msg = f"站点 {record.name} 使用了未知的API类型: {record.provider_type}"
                raise ConfigurationError(msg, extra={"site": record.name, "provider_type": record.provider_type})
            if not record.name.strip() or not record.url.strip():
                msg = f"站点名称与地址不能为空: {record.provider_type}"
                raise ConfigurationError(msg)
            if record.is_default:
                existing = defaults.get(record.provider_type)
                if existing is not None:
                    msg = f"{record.provider_type} 存在多个默认站点: {existing.name}, {record.name}"
                    raise ConfigurationError(msg)
                defaults[record.provider_type] = record
            by_type.setdefault(record.provider_type, []).append(record)

        self._records = records
        self._by_type = {key: tuple(items) for key, items in by_type.items()}
        self._defaults = defaults

    @classmethod
    def from_config(cls, config: SitesConfigFile, registry: ProviderTypeRegistry) -> SiteDirectory:
        sites = [
            SiteRecord(
                provider_type=entry.provider_type,
                name=entry.name,
                url=entry.url,
                affiliate_path=entry.affiliate_path,
                is_default=entry.default,
            )
            for entry in config.sites
        ]
        return cls(sites, registry)

    @classmethod
    def from_mapping(cls, raw_config: object, registry: ProviderTypeRegistry) -> SiteDirectory:
        """从原始 dict(与 YAML 文件同结构)构建目录."""
        config = validate_config_payload(raw_config, SitesConfigFile, config_name=_CONFIG_NAME)
        return cls.from_config(config, registry)

    @classmethod
    def from_config_file(cls, config_path: str | Path, registry: ProviderTypeRegistry) -> SiteDirectory:
        """从 YAML 配置文件加载站点目录."""
        config = read_yaml_config(config_path, SitesConfigFile, config_name=_CONFIG_NAME)
        directory = cls.from_config(config, registry)
        logger.info(
            "sites_config_loaded",
            path=str(config_path),
            site_count=len(directory),
            provider_types=list(directory.provider_types()),
        )
        return directory

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SiteRecord]:
        return iter(self._records)

    def all_sites(self) -> tuple[SiteRecord, ...]:
        return self._records

    def provider_types(self) -> tuple[str, ...]:
        """返回至少有一个站点的 API 类型, 按首次出现顺序."""
        return tuple(self._by_type)

    def list_by_provider_type(self, provider_key: object) -> tuple[SiteRecord, ...]:
        """按 API 类型筛选站点, 未知类型返回空元组."""
        if not isinstance(provider_key, str):
            return ()
        return self._by_type.get(provider_key, ())

    def search(self, keyword: str | None) -> tuple[SiteRecord, ...]:
        """按名称、地址或 API 类型做不区分大小写的子串匹配.

        Args:
            keyword: 关键字; None、空串或仅空白时返回全部站点.

        Returns:
            tuple[SiteRecord, ...]: 命中的站点, 保持声明顺序.

        """
        needle = (keyword or "").strip().lower()
        if not needle:
            return self._records
        return tuple(
            record
            for record in self._records
            if needle in record.name.lower()
            or needle in record.url.lower()
            or needle in record.provider_type.lower()
        )

    def get_default_for_type(self, provider_key: object) -> SiteRecord | None:
        if not isinstance(provider_key, str):
            return None
        return self._defaults.get(provider_key)


@lru_cache(maxsize=4)
def _load_directory(config_path: str, provider_types_config_path: str | None) -> SiteDirectory:
    registry = get_provider_registry(provider_types_config_path)
    return SiteDirectory.from_config_file(config_path, registry)


def get_site_directory(
    config_path: str | Path | None = None,
    *,
    provider_types_config_path: str | Path | None = None,
) -> SiteDirectory:
    """返回进程级缓存的站点目录, 首次调用时加载."""
    return _load_directory(
        str(config_path or DEFAULT_SITES_CONFIG),
        str(provider_types_config_path) if provider_types_config_path else None,
    )


__all__ = ["SiteDirectory", "get_site_directory"]
