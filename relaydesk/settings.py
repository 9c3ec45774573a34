"""RelayDesk - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口,避免散落在各模块中重复解析.
- `create_app(settings=...)` 只消费 Settings,不再直接读取环境变量.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- 生产环境默认更严格: 缺失 SECRET_KEY 会直接抛出 ValueError.
"""

from __future__ import annotations

import logging
import secrets
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from relaydesk.constants.upstream import DEFAULT_RAW_PREVIEW_CHARS

logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_ROOT.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

DEFAULT_ENVIRONMENT = "development"
APP_VERSION = "1.0.0"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_API_V1_DOCS_ENABLED = True

DEFAULT_PROVIDER_TYPES_CONFIG = PACKAGE_ROOT / "config" / "provider_types.yaml"
DEFAULT_SITES_CONFIG = PACKAGE_ROOT / "config" / "sites.yaml"

# 原客户端对上游请求的默认超时
DEFAULT_UPSTREAM_REQUEST_TIMEOUT_SECONDS = 15.0

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """应用运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="FLASK_ENV")
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")

    app_name: str = Field(default="RelayDesk", validation_alias="APP_NAME")
    app_version: str = APP_VERSION

    secret_key: str = Field(default="", validation_alias="SECRET_KEY")

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")
    enable_debug_log: bool = Field(default=False, validation_alias="ENABLE_DEBUG_LOG")

    api_v1_docs_enabled: bool = Field(default=DEFAULT_API_V1_DOCS_ENABLED, validation_alias="API_V1_DOCS_ENABLED")

    provider_types_config_path: Path = Field(
        default=DEFAULT_PROVIDER_TYPES_CONFIG,
        validation_alias="PROVIDER_TYPES_CONFIG",
    )
    sites_config_path: Path = Field(default=DEFAULT_SITES_CONFIG, validation_alias="SITES_CONFIG")

    upstream_debug_preview_chars: int = Field(
        default=DEFAULT_RAW_PREVIEW_CHARS,
        validation_alias="UPSTREAM_DEBUG_PREVIEW_CHARS",
    )
    upstream_request_timeout_seconds: float = Field(
        default=DEFAULT_UPSTREAM_REQUEST_TIMEOUT_SECONDS,
        validation_alias="UPSTREAM_REQUEST_TIMEOUT",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in _VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL 必须为 {', '.join(_VALID_LOG_LEVELS)} 之一")
        return normalized

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    def to_flask_config(self) -> dict[str, object]:
        """转换为 Flask app.config 可写入的配置字典."""
        return {
            "ENV": self.environment,
            "DEBUG": self.debug,
            "APP_NAME": self.app_name,
            "APP_VERSION": self.app_version,
            "SECRET_KEY": self.secret_key,
            "LOG_LEVEL": self.log_level,
            "ENABLE_DEBUG_LOG": self.enable_debug_log,
            "API_V1_DOCS_ENABLED": self.api_v1_docs_enabled,
            "PROVIDER_TYPES_CONFIG": str(self.provider_types_config_path),
            "SITES_CONFIG": str(self.sites_config_path),
            "UPSTREAM_DEBUG_PREVIEW_CHARS": self.upstream_debug_preview_chars,
            "UPSTREAM_REQUEST_TIMEOUT": self.upstream_request_timeout_seconds,
        }

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @model_validator(mode="after")
    def _apply_defaults_and_validate(self) -> Settings:
        environment_normalized = self.environment.strip().lower()

        debug = self._resolve_debug(environment_normalized)
        self._ensure_secret_key(debug)
        self._apply_api_docs_default(environment_normalized)

        self._validate()
        return self

    def _resolve_debug(self, environment_normalized: str) -> bool:
        if "debug" in self.model_fields_set:
            return bool(self.debug)
        debug = environment_normalized != "production"
        object.__setattr__(self, "debug", debug)
        return debug

    def _ensure_secret_key(self, debug: bool) -> None:
        if self.secret_key:
            return
        if not debug:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        object.__setattr__(self, "secret_key", secrets.token_urlsafe(32))
        logger.warning("⚠️  开发环境使用随机生成的SECRET_KEY,生产环境请设置环境变量")

    def _apply_api_docs_default(self, environment_normalized: str) -> None:
        if "api_v1_docs_enabled" in self.model_fields_set:
            return
        if environment_normalized == "production":
            object.__setattr__(self, "api_v1_docs_enabled", False)

    def _validate(self) -> None:
        if self.upstream_debug_preview_chars <= 0:
            raise ValueError("UPSTREAM_DEBUG_PREVIEW_CHARS 必须为正整数")
        if self.upstream_request_timeout_seconds <= 0:
            raise ValueError("UPSTREAM_REQUEST_TIMEOUT 必须大于 0")


__all__ = ["APP_VERSION", "Settings"]
