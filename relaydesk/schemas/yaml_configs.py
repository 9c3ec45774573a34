"""YAML 配置文件的 schema(一次性校验/规范化入口).

这些 schema 用于读取 `relaydesk/config/*.yaml` 本地配置文件:
- 在读取入口完成一次性 canonicalization + 校验
- 下游逻辑只消费已规整的 typed config，避免运行期散落 `or` 兜底链
- 同时接受 snake_case 与 camelCase 字段名(如 `displayName`)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, Field, field_validator, model_validator

from relaydesk.schemas.base import PayloadSchema


def _strip_required_text(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("字段不能为空")
    return value.strip()


def _strip_optional_text(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("必须为字符串")
    return value.strip() or None


class ProviderTypeConfig(PayloadSchema):
    """单个 API 类型配置."""

    display_name: str = Field(validation_alias=AliasChoices("display_name", "displayName"))
    supported_auth_methods: tuple[str, ...] = Field(
        validation_alias=AliasChoices("supported_auth_methods", "supportedAuthMethods"),
    )
    requires_user_id: dict[str, bool] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("requires_user_id", "requiresUserId"),
    )
    default_auto_checkin: bool = Field(
        default=False,
        validation_alias=AliasChoices("default_auto_checkin", "defaultAutoCheckin"),
    )
    description: str = ""
    user_id_header: str | None = Field(
        default=None,
        validation_alias=AliasChoices("user_id_header", "userIdHeader"),
    )
    checkin_path: str | None = Field(default=None, validation_alias=AliasChoices("checkin_path", "checkinPath"))

    @field_validator("display_name", mode="before")
    @classmethod
    def _parse_display_name(cls, value: Any) -> str:
        return _strip_required_text(value)

    @field_validator("description", mode="before")
    @classmethod
    def _parse_description(cls, value: Any) -> str:
        return _strip_optional_text(value) or ""

    @field_validator("user_id_header", mode="before")
    @classmethod
    def _parse_user_id_header(cls, value: Any) -> str | None:
        header = _strip_optional_text(value)
        return header.lower() if header else None

    @field_validator("checkin_path", mode="before")
    @classmethod
    def _parse_checkin_path(cls, value: Any) -> str | None:
        path = _strip_optional_text(value)
        if path and not path.startswith("/"):
            raise ValueError("checkin_path 必须以 / 开头")
        return path

    @field_validator("supported_auth_methods", mode="before")
    @classmethod
    def _parse_supported_auth_methods(cls, value: Any) -> tuple[str, ...]:
        if not isinstance(value, (list, tuple)):
            raise ValueError("supported_auth_methods 必须为字符串列表")  # noqa: TRY004
        methods = tuple(_strip_required_text(item) for item in value)
        if not methods:
            raise ValueError("supported_auth_methods 不能为空")
        if len(set(methods)) != len(methods):
            raise ValueError("supported_auth_methods 存在重复项")
        return methods

    @field_validator("requires_user_id", mode="before")
    @classmethod
    def _parse_requires_user_id(cls, value: Any) -> dict[str, bool]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("requires_user_id 必须为对象")  # noqa: TRY004
        parsed: dict[str, bool] = {}
        for key, flag in value.items():
            if not isinstance(flag, bool):
                raise ValueError(f"requires_user_id.{key} 必须为布尔值")  # noqa: TRY004
            parsed[_strip_required_text(key)] = flag
        return parsed


class ProviderTypesConfigFile(PayloadSchema):
    """`provider_types.yaml` 文件结构."""

    provider_types: dict[str, ProviderTypeConfig]

    @model_validator(mode="before")
    @classmethod
    def _validate_root(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            raise ValueError("配置文件格式错误，必须为 YAML mapping")  # noqa: TRY004
        return data

    @field_validator("provider_types", mode="before")
    @classmethod
    def _strip_provider_keys(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            raise ValueError("provider_types 必须为对象")  # noqa: TRY004
        normalized: dict[str, Any] = {}
        for key, entry in value.items():
            normalized[_strip_required_text(key)] = entry
        return normalized


class SiteConfig(PayloadSchema):
    """单条已知站点配置."""

    provider_type: str = Field(validation_alias=AliasChoices("provider_type", "providerType", "api_type", "apiType"))
    name: str
    url: str
    affiliate_path: str = Field(
        default="",
        validation_alias=AliasChoices("affiliate_path", "affiliatePath", "aff"),
    )
    default: bool = False

    @field_validator("provider_type", "name", mode="before")
    @classmethod
    def _parse_required_text(cls, value: Any) -> str:
        return _strip_required_text(value)

    @field_validator("url", mode="before")
    @classmethod
    def _parse_url(cls, value: Any) -> str:
        url = _strip_required_text(value)
        if not url.startswith(("http://", "https://")):
            raise ValueError("url 必须以 http:// 或 https:// 开头")
        return url.rstrip("/")

    @field_validator("affiliate_path", mode="before")
    @classmethod
    def _parse_affiliate_path(cls, value: Any) -> str:
        return _strip_optional_text(value) or ""


class SitesConfigFile(PayloadSchema):
    """`sites.yaml` 文件结构."""

    sites: list[SiteConfig] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _validate_root(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            raise ValueError("配置文件格式错误，必须为 YAML mapping")  # noqa: TRY004
        return data


__all__ = [
    "ProviderTypeConfig",
    "ProviderTypesConfigFile",
    "SiteConfig",
    "SitesConfigFile",
]
