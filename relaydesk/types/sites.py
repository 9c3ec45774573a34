"""站点目录相关类型定义."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SiteRecord:
    """已知站点记录.

    Attributes:
        provider_type: 所属 API 类型,加载时已校验存在于注册表.
        name: 站点名称.
        url: 站点基础地址.
        affiliate_path: 注册/邀请路径,如 ``/register?aff=xFc4``.
        is_default: 是否为该 API 类型的默认推荐站点.

    """

    provider_type: str
    name: str
    url: str
    affiliate_path: str
    is_default: bool = False

    @property
    def registration_url(self) -> str:
        """拼接后的注册地址."""
        return f"{self.url.rstrip('/')}{self.affiliate_path}"

    def to_dict(self) -> dict[str, object]:
        return {
            "provider_type": self.provider_type,
            "name": self.name,
            "url": self.url,
            "affiliate_path": self.affiliate_path,
            "registration_url": self.registration_url,
            "is_default": self.is_default,
        }


__all__ = ["SiteRecord"]
