"""API 类型相关服务: 注册表、凭据校验、请求头构建."""

from .credential_validation import format_validation_errors, validate_site_credentials
from .provider_registry import ProviderTypeRegistry, get_provider_registry
from .request_headers import build_request_headers

__all__ = [
    "ProviderTypeRegistry",
    "build_request_headers",
    "format_validation_errors",
    "get_provider_registry",
    "validate_site_credentials",
]
