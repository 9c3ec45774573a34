"""API 类型注册表.

描述每个上游站点家族支持的授权方式、是否需要用户 ID 以及默认签到策略.
注册表在启动时从 `provider_types.yaml` 加载并一次性校验, 之后只读.

约定:
- 所有查询谓词都是全函数: 未知 key 或非字符串输入返回 False/None, 从不抛出.
- 结构约束(类型集合封闭、requires_user_id 键集合与已支持方式一致)只在加载时检查.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

from relaydesk.constants.provider_types import AUTH_METHODS, AuthMethodKey, ProviderTypeKey
from relaydesk.errors import ConfigurationError
from relaydesk.schemas.yaml_configs import ProviderTypesConfigFile
from relaydesk.services.common.config_files import read_yaml_config, validate_config_payload
from relaydesk.settings import DEFAULT_PROVIDER_TYPES_CONFIG
from relaydesk.types.providers import AuthMethod, ProviderType
from relaydesk.utils.structlog_config import get_system_logger

logger = get_system_logger()

_CONFIG_NAME = "API类型"

# 针对特定类型的配置建议
_RECOMMENDATION_NOTES: Mapping[str, str] = MappingProxyType(
    {
        ProviderTypeKey.ANY_ROUTER: "AnyRouter 只支持 sessions 授权方式，且需要提供 userId",
        ProviderTypeKey.VO_API: "VoApi 支持两种授权方式，建议根据实际需求选择",
    },
)


class ProviderTypeRegistry:
    """只读的 API 类型注册表."""

    def __init__(
        self,
        provider_types: Iterable[ProviderType],
        auth_methods: Mapping[str, AuthMethod] = AUTH_METHODS,
    ) -> None:
        """构建注册表并执行结构校验.

        Args:
            provider_types: 按声明顺序排列的 API 类型.
            auth_methods: 授权方式目录, 默认使用内置目录.

        Raises:
            ConfigurationError: 任意结构约束不满足时抛出.

        """
        ordered = tuple(provider_types)
        _validate_provider_types(ordered)
        self._order: tuple[str, ...] = tuple(item.key for item in ordered)
        self._types: Mapping[str, ProviderType] = MappingProxyType({item.key: item for item in ordered})
        self._auth_methods: Mapping[str, AuthMethod] = MappingProxyType(dict(auth_methods))

    @classmethod
    def from_config(cls, config: ProviderTypesConfigFile) -> ProviderTypeRegistry:
        """从已校验的文件级 schema 构建注册表."""
        provider_types = [
            ProviderType(
                key=key,
                display_name=entry.display_name,
                supported_auth_methods=entry.supported_auth_methods,
                requires_user_id=MappingProxyType(dict(entry.requires_user_id)),
                default_auto_checkin=entry.default_auto_checkin,
                description=entry.description,
                user_id_header=entry.user_id_header,
                checkin_path=entry.checkin_path,
            )
            for key, entry in config.provider_types.items()
        ]
        return cls(provider_types)

    @classmethod
    def from_mapping(cls, raw_config: object) -> ProviderTypeRegistry:
        """从原始 dict(与 YAML 文件同结构)构建注册表, 主要用于测试与嵌入场景."""
        config = validate_config_payload(raw_config, ProviderTypesConfigFile, config_name=_CONFIG_NAME)
        return cls.from_config(config)

    @classmethod
    def from_config_file(cls, config_path: str | Path) -> ProviderTypeRegistry:
        """从 YAML 配置文件加载注册表."""
        config = read_yaml_config(config_path, ProviderTypesConfigFile, config_name=_CONFIG_NAME)
        registry = cls.from_config(config)
        logger.info(
            "provider_types_config_loaded",
            path=str(config_path),
            provider_types=list(registry.list_provider_types()),
        )
        return registry

    # ------------------------------------------------------------------
    # 核心查询
    # ------------------------------------------------------------------
    def list_provider_types(self) -> tuple[str, ...]:
        """返回所有 API 类型 key, 保持声明顺序."""
        return self._order

    def get_provider_type(self, provider_key: object) -> ProviderType | None:
        """获取 API 类型描述, 未知 key 返回 None."""
        if not isinstance(provider_key, str):
            return None
        return self._types.get(provider_key)

    def is_valid_provider_type(self, provider_key: object) -> bool:
        return self.get_provider_type(provider_key) is not None

    def is_valid_auth_method(self, auth_method: object) -> bool:
        return isinstance(auth_method, str) and auth_method in self._auth_methods

    def is_auth_method_supported(self, provider_key: object, auth_method: object) -> bool:
        """检查 API 类型是否支持指定授权方式.

        Args:
            provider_key: API 类型 key.
            auth_method: 授权方式 key.

        Returns:
            bool: 两者均有效且该组合被支持时为 True.

        """
        provider_type = self.get_provider_type(provider_key)
        if provider_type is None or not isinstance(auth_method, str):
            return False
        return provider_type.supports(auth_method)

    def requires_subject_identifier(self, provider_key: object, auth_method: object) -> bool:
        """检查该组合是否需要额外提供用户 ID.

        不支持的组合一律返回 False, 调用方应先用 ``is_auth_method_supported`` 区分.
        """
        if not self.is_auth_method_supported(provider_key, auth_method):
            return False
        provider_type = self._types[str(provider_key)]
        return bool(provider_type.requires_user_id[str(auth_method)])

    def default_auto_checkin_enabled(self, provider_key: object) -> bool:
        provider_type = self.get_provider_type(provider_key)
        return bool(provider_type and provider_type.default_auto_checkin)

    # ------------------------------------------------------------------
    # 授权方式目录
    # ------------------------------------------------------------------
    def list_auth_methods(self) -> tuple[AuthMethod, ...]:
        return tuple(self._auth_methods.values())

    def get_auth_method(self, auth_method: object) -> AuthMethod | None:
        if not isinstance(auth_method, str):
            return None
        return self._auth_methods.get(auth_method)

    # ------------------------------------------------------------------
    # 扩展信息
    # ------------------------------------------------------------------
    def get_user_id_header(self, provider_key: object) -> str | None:
        """返回携带用户 ID 的请求头名称, 该类型不发送时返回 None."""
        provider_type = self.get_provider_type(provider_key)
        return provider_type.user_id_header if provider_type else None

    def get_checkin_path(self, provider_key: object) -> str | None:
        provider_type = self.get_provider_type(provider_key)
        return provider_type.checkin_path if provider_type else None

    def supports_checkin(self, provider_key: object) -> bool:
        return self.get_checkin_path(provider_key) is not None

    def get_recommended_config(self, provider_key: object) -> dict[str, Any] | None:
        """获取 API 类型的推荐配置.

        推荐授权方式取已支持列表中的第一个.

        Args:
            provider_key: API 类型 key.

        Returns:
            dict | None: 展示信息与推荐项, 未知类型返回 None.

        """
        provider_type = self.get_provider_type(provider_key)
        if provider_type is None:
            return None

        recommendations: dict[str, Any] = {
            "preferred_auth_method": provider_type.supported_auth_methods[0],
            "auto_checkin_recommended": provider_type.default_auto_checkin,
        }
        note = _RECOMMENDATION_NOTES.get(provider_type.key)
        if note:
            recommendations["notes"] = note

        return {
            "api_type": provider_type.key,
            "display_name": provider_type.display_name,
            "description": provider_type.description,
            "supported_auth_methods": list(provider_type.supported_auth_methods),
            "auth_methods": [
                {
                    "key": method,
                    "display_name": self._auth_methods[method].display_name,
                    "requires_user_id": bool(provider_type.requires_user_id[method]),
                }
                for method in provider_type.supported_auth_methods
            ],
            "default_auto_checkin": provider_type.default_auto_checkin,
            "supports_checkin": provider_type.checkin_path is not None,
            "recommendations": recommendations,
        }

    def build_select_option(self, provider_key: object) -> dict[str, str] | None:
        """构建下拉选项 ``{value, label, description}``, 未知类型返回 None."""
        provider_type = self.get_provider_type(provider_key)
        if provider_type is None:
            return None
        return {
            "value": provider_type.key,
            "label": provider_type.display_name,
            "description": provider_type.description,
        }

    def list_select_options(self) -> list[dict[str, str]]:
        options = []
        for key in self._order:
            option = self.build_select_option(key)
            if option is not None:
                options.append(option)
        return options


def _validate_provider_types(provider_types: tuple[ProviderType, ...]) -> None:
    keys = [item.key for item in provider_types]
    duplicates = sorted({key for key in keys if keys.count(key) > 1})
    if duplicates:
        msg = f"API类型重复定义: {', '.join(duplicates)}"
        raise ConfigurationError(msg)

    missing = [key for key in ProviderTypeKey.ALL if key not in keys]
    unknown = [key for key in keys if key not in ProviderTypeKey.ALL]
    if missing or unknown:
        parts = []
        if missing:
            parts.append(f"缺少: {', '.join(missing)}")
        if unknown:
            parts.append(f"未知: {', '.join(unknown)}")
        msg = f"API类型配置与内置类型不一致({'; '.join(parts)})"
        raise ConfigurationError(msg, extra={"missing": missing, "unknown": unknown})

    for provider_type in provider_types:
        _validate_auth_table(provider_type)


def _validate_auth_table(provider_type: ProviderType) -> None:
    methods = provider_type.supported_auth_methods
    if not methods:
        msg = f"{provider_type.key} 未声明任何授权方式"
        raise ConfigurationError(msg)
    if len(set(methods)) != len(methods):
        msg = f"{provider_type.key} 的授权方式存在重复项"
        raise ConfigurationError(msg)

    invalid = [method for method in methods if not AuthMethodKey.is_valid(method)]
    if invalid:
        msg = f"{provider_type.key} 声明了无效的授权方式: {', '.join(invalid)}"
        raise ConfigurationError(msg)

    declared = set(provider_type.requires_user_id)
    orphan = sorted(declared - set(methods))
    absent = [method for method in methods if method not in declared]
    if orphan or absent:
        msg = f"{provider_type.key} 的 requires_user_id 与已支持授权方式不一致"
        raise ConfigurationError(msg, extra={"orphan": orphan, "missing": absent})


@lru_cache(maxsize=4)
def _load_registry(config_path: str) -> ProviderTypeRegistry:
    return ProviderTypeRegistry.from_config_file(config_path)


def get_provider_registry(config_path: str | Path | None = None) -> ProviderTypeRegistry:
    """返回进程级缓存的注册表, 首次调用时加载.

    Args:
        config_path: 配置文件路径, 默认使用内置 `provider_types.yaml`.

    """
    return _load_registry(str(config_path or DEFAULT_PROVIDER_TYPES_CONFIG))


__all__ = ["ProviderTypeRegistry", "get_provider_registry"]
