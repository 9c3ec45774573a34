"""API 类型(上游站点家族)相关类型定义."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthMethod:
    """授权方式描述."""

    key: str
    display_name: str
    description: str


@dataclass(frozen=True, slots=True)
class ProviderType:
    """上游站点家族的能力描述.

    Attributes:
        key: 稳定的类型标识,如 ``NewApi``.
        display_name: 展示名称.
        supported_auth_methods: 支持的授权方式,按推荐顺序排列.
        requires_user_id: 每种已支持授权方式是否需要额外提供用户 ID,键集合与
            ``supported_auth_methods`` 完全一致.
        default_auto_checkin: 新建站点时是否默认开启自动签到.
        description: 说明文字.
        user_id_header: 携带用户 ID 的请求头名称,为 None 表示该类型不发送.
        checkin_path: 签到接口相对路径,为 None 表示不支持签到.

    """

    key: str
    display_name: str
    supported_auth_methods: tuple[str, ...]
    requires_user_id: Mapping[str, bool]
    default_auto_checkin: bool
    description: str
    user_id_header: str | None = None
    checkin_path: str | None = None

    def supports(self, auth_method: str) -> bool:
        """判断是否支持指定授权方式."""
        return auth_method in self.supported_auth_methods


__all__ = ["AuthMethod", "ProviderType"]
