"""常量模块。

集中管理所有系统常量，包括错误消息、API 类型、授权方式、上游响应形状等。

主要常量：
- ProviderTypeKey: API 类型常量
- AuthMethodKey: 授权方式常量
- TokenListShape: 令牌列表响应形状
- ErrorMessages: 错误消息常量
- HttpStatus: HTTP 状态码常量
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

# 导入API类型与授权方式常量
from .provider_types import AUTH_METHODS, AuthMethodKey, ProviderTypeKey

# 导入系统常量
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    LogLevel,
    SuccessMessages,
)

# 导入上游响应常量
from .upstream import CheckinResultKind, TokenListShape, TokenStatus

__all__ = [
    "AUTH_METHODS",
    "AuthMethodKey",
    "CheckinResultKind",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "HttpStatus",
    "LogLevel",
    "ProviderTypeKey",
    "SuccessMessages",
    "TokenListShape",
    "TokenStatus",
]
