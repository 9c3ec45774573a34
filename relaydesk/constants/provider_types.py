"""API 类型与授权方式常量.

定义所有支持的上游站点家族与授权方式,避免魔法字符串.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import ClassVar

from relaydesk.types.providers import AuthMethod


class ProviderTypeKey:
    """API 类型常量.

    该集合是封闭的: 配置文件中声明的类型必须与 ``ALL`` 完全一致.
    """

    NEW_API = "NewApi"
    VELOERA = "Veloera"
    ANY_ROUTER = "AnyRouter"
    VO_API = "VoApi"
    HUSAN_API = "HusanApi"
    DONE_HUB = "DoneHub"

    ALL: ClassVar[tuple[str, ...]] = (NEW_API, VELOERA, ANY_ROUTER, VO_API, HUSAN_API, DONE_HUB)

    @classmethod
    def is_valid(cls, provider_key: object) -> bool:
        """验证 API 类型是否有效.

        Args:
            provider_key: 待校验的值,非字符串一律视为无效.

        Returns:
            bool: 是否为支持的 API 类型

        """
        return isinstance(provider_key, str) and provider_key in cls.ALL


class AuthMethodKey:
    """授权方式常量."""

    SESSIONS = "sessions"
    TOKEN = "token"

    ALL: ClassVar[tuple[str, ...]] = (SESSIONS, TOKEN)

    @classmethod
    def is_valid(cls, auth_method: object) -> bool:
        """验证授权方式是否有效."""
        return isinstance(auth_method, str) and auth_method in cls.ALL


AUTH_METHODS: MappingProxyType[str, AuthMethod] = MappingProxyType(
    {
        AuthMethodKey.SESSIONS: AuthMethod(
            key=AuthMethodKey.SESSIONS,
            display_name="Sessions",
            description="基于会话的认证方式",
        ),
        AuthMethodKey.TOKEN: AuthMethod(
            key=AuthMethodKey.TOKEN,
            display_name="Token",
            description="基于令牌的认证方式",
        ),
    },
)


__all__ = ["AUTH_METHODS", "AuthMethodKey", "ProviderTypeKey"]
