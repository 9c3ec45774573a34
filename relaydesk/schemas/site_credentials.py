"""站点凭据写路径 schema."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from relaydesk.schemas.base import PayloadSchema


def _parse_optional_string(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


class SiteCredentialsPayload(PayloadSchema):
    """站点 API 类型/授权方式/凭据组合.

    字段缺失或为空白字符串时统一规整为 None, 由校验服务给出中文错误提示.
    ``user_id`` 允许上游/前端以数字提交.
    """

    api_type: str | None = Field(default=None, validation_alias=AliasChoices("api_type", "apiType"))
    auth_method: str | None = Field(default=None, validation_alias=AliasChoices("auth_method", "authMethod"))
    user_id: str | None = Field(default=None, validation_alias=AliasChoices("user_id", "userId"))
    sessions: str | None = None
    token: str | None = None

    @field_validator("api_type", "auth_method", "user_id", "sessions", "token", mode="before")
    @classmethod
    def _parse_text(cls, value: Any) -> str | None:
        return _parse_optional_string(value)


__all__ = ["SiteCredentialsPayload"]
