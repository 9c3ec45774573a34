"""上游令牌记录的宽松视图.

目的:
- 令牌列表本身原样透传, 不做 schema 强校验.
- 仅在需要统计(启用数/无限额度/永不过期)时, 通过该 schema 做一次性规整.
"""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, field_validator

from relaydesk.constants.upstream import NEVER_EXPIRES, TokenStatus
from relaydesk.schemas.base import PayloadSchema


def _as_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return False


class UpstreamTokenSchema(PayloadSchema):
    """上游令牌 schema(仅解析 + 默认值, 保留未知字段)."""

    model_config = ConfigDict(extra="allow")

    id: int | None = None
    name: str | None = None
    status: int | None = None
    remain_quota: int | None = None
    used_quota: int | None = None
    unlimited_quota: bool = False
    expired_time: int | None = None

    @field_validator("id", "status", "remain_quota", "used_quota", "expired_time", mode="before")
    @classmethod
    def _parse_int(cls, value: Any) -> int | None:
        return _as_int(value)

    @field_validator("name", mode="before")
    @classmethod
    def _parse_name(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("unlimited_quota", mode="before")
    @classmethod
    def _parse_unlimited_quota(cls, value: Any) -> bool:
        return _as_bool(value)

    @property
    def is_enabled(self) -> bool:
        return self.status == TokenStatus.ENABLED

    @property
    def never_expires(self) -> bool:
        return self.expired_time == NEVER_EXPIRES


__all__ = ["UpstreamTokenSchema"]
