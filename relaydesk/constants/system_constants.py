"""RelayDesk - 常量定义模块

统一管理错误分类、严重度与提示文案.
"""

from enum import Enum


class LogLevel(Enum):
    """日志级别枚举."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    BUSINESS = "business"
    CONFIGURATION = "configuration"
    EXTERNAL = "external"
    NETWORK = "network"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "数据验证失败"
    RESOURCE_NOT_FOUND = "资源不存在"
    INVALID_REQUEST = "无效的请求"
    JSON_REQUIRED = "请求必须是JSON格式"

    # 配置错误
    CONFIGURATION_ERROR = "配置文件无效"

    # 上游站点错误
    UPSTREAM_RESPONSE_FAILED = "上游站点返回失败"
    UPSTREAM_RESPONSE_MALFORMED = "上游站点返回数据格式错误"
    UPSTREAM_HTML_RESPONSE = "站点返回HTML页面，可能有反爬虫保护或需要验证"
    TOKEN_LIST_MALFORMED = "令牌列表API返回数据格式错误"
    TOKEN_LIST_FAILED = "获取令牌列表失败"
    TOKEN_LIST_SHAPE_UNKNOWN = "令牌列表数据格式异常，请检查API响应格式"
    MODELS_LIST_MALFORMED = "模型列表API返回数据格式错误"
    MODELS_LIST_FAILED = "获取模型列表失败"
    MODELS_LIST_SHAPE_UNKNOWN = "模型列表数据格式异常"
    CHECKIN_RESPONSE_MALFORMED = "签到响应格式异常"

    # 业务错误
    PROVIDER_TYPE_NOT_FOUND = "API类型不存在"
    DEFAULT_SITE_NOT_FOUND = "该API类型没有默认站点"


class SuccessMessages:
    """成功消息常量."""

    OPERATION_SUCCESS = "操作成功"
    PROVIDER_TYPES_LOADED = "获取API类型成功"
    SITES_LOADED = "获取站点列表成功"
    CREDENTIALS_VALID = "凭据校验通过"


__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "LogLevel",
    "SuccessMessages",
]
