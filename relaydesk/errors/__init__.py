"""RelayDesk - 统一异常定义.

集中维护业务异常类型、严重度与 HTTP 状态码映射.

约定:
- 注册表/站点目录的查询谓词不抛异常, 未知输入返回 False/None.
- 响应归一化把 UpstreamFailureError/UpstreamShapeError 作为结果的一部分返回,
  由上层编排(API 层)决定重试/跳过/上报.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from werkzeug.exceptions import HTTPException

from relaydesk.constants import HttpStatus
from relaydesk.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

if TYPE_CHECKING:
    from relaydesk.types.structures import LoggerExtra


@dataclass(slots=True)
class ExceptionMetadata:
    """异常的元信息."""

    status_code: int
    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str

    @property
    def default_message(self) -> str:
        """根据 message key 获取默认文案."""
        return getattr(ErrorMessages, self.default_message_key, ErrorMessages.INTERNAL_ERROR)

    @property
    def recoverable(self) -> bool:
        """严重度为 LOW/MEDIUM 时视为可恢复."""
        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class AppError(Exception):
    """统一的基础业务异常.

    Args:
        message: 自定义错误文案,若为空则根据 ``message_key`` 推导.
        message_key: ``ErrorMessages`` 中的键名.
        extra: 非敏感诊断字段,会出现在错误封套的 ``extra`` 中.
        severity: 覆盖默认严重度.
        category: 覆盖默认分类.
        status_code: 覆盖默认 HTTP 状态码.

    """

    metadata = ExceptionMetadata(
        status_code=HttpStatus.INTERNAL_SERVER_ERROR,
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: LoggerExtra | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message_key = message_key or self.metadata.default_message_key
        self.message = self._resolve_message(message, self.message_key)
        self.extra = dict(extra or {})
        self._severity = severity or self.metadata.severity
        self._category = category or self.metadata.category
        self._status_code = status_code or self.metadata.status_code
        super().__init__(self.message)

    @property
    def severity(self) -> ErrorSeverity:
        """返回异常实例对应的严重度."""
        return self._severity

    @property
    def category(self) -> ErrorCategory:
        """返回异常所属的业务分类."""
        return self._category

    @property
    def status_code(self) -> int:
        """返回异常对应的 HTTP 状态码."""
        return self._status_code

    @property
    def recoverable(self) -> bool:
        """严重度为 LOW 或 MEDIUM 时为 True,表示可重试或跳过."""
        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)

    @staticmethod
    def _resolve_message(message: str | None, message_key: str) -> str:
        if message:
            return message
        return getattr(ErrorMessages, message_key, ErrorMessages.INTERNAL_ERROR)


class ValidationError(AppError):
    """表示输入参数或请求体验证失败.

    注册表的查询谓词不会抛出该异常; 仅由 API 层在拒绝请求时使用, 默认返回 400.
    """

    metadata = ExceptionMetadata(
        status_code=HttpStatus.BAD_REQUEST,
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )


AppValidationError = ValidationError


class NotFoundError(AppError):
    """表示客户端请求的资源不存在, 默认返回 404."""

    metadata = ExceptionMetadata(
        status_code=HttpStatus.NOT_FOUND,
        category=ErrorCategory.BUSINESS,
        severity=ErrorSeverity.LOW,
        default_message_key="RESOURCE_NOT_FOUND",
    )


class ConfigurationError(AppError):
    """表示静态配置(API 类型表、站点目录)违反结构约束.

    只在加载阶段抛出, 加载成功后的查询不会再触发.
    """

    metadata = ExceptionMetadata(
        status_code=HttpStatus.INTERNAL_SERVER_ERROR,
        category=ErrorCategory.CONFIGURATION,
        severity=ErrorSeverity.CRITICAL,
        default_message_key="CONFIGURATION_ERROR",
    )


class UpstreamFailureError(AppError):
    """上游明确返回失败(success 为假)或返回了非对象数据.

    ``message`` 优先使用上游自带的 message, 否则使用通用兜底文案.
    """

    metadata = ExceptionMetadata(
        status_code=HttpStatus.BAD_GATEWAY,
        category=ErrorCategory.EXTERNAL,
        severity=ErrorSeverity.MEDIUM,
        default_message_key="UPSTREAM_RESPONSE_FAILED",
    )


class UpstreamShapeError(AppError):
    """上游响应中找不到任何已知的列表字段.

    ``extra["raw_preview"]`` 携带截断后的原始片段, 仅用于排障, 不再解析.
    """

    metadata = ExceptionMetadata(
        status_code=HttpStatus.BAD_GATEWAY,
        category=ErrorCategory.EXTERNAL,
        severity=ErrorSeverity.MEDIUM,
        default_message_key="TOKEN_LIST_SHAPE_UNKNOWN",
    )

    @property
    def raw_preview(self) -> str | None:
        value = self.extra.get("raw_preview")
        return value if isinstance(value, str) else None


EXCEPTION_STATUS_MAP: dict[type[BaseException], int] = {
    ValidationError: ValidationError.metadata.status_code,
    NotFoundError: NotFoundError.metadata.status_code,
    ConfigurationError: ConfigurationError.metadata.status_code,
    UpstreamFailureError: UpstreamFailureError.metadata.status_code,
    UpstreamShapeError: UpstreamShapeError.metadata.status_code,
}


def map_exception_to_status(error: Exception, default: int = HttpStatus.INTERNAL_SERVER_ERROR) -> int:
    """根据异常类型推导 HTTP 状态码.

    Args:
        error: 捕获到的异常对象.
        default: 无法匹配时的默认状态码.

    Returns:
        int: 与异常对应的 HTTP 状态码.

    """
    if isinstance(error, AppError):
        return error.status_code

    if isinstance(error, HTTPException):
        code = getattr(error, "code", None)
        if code is not None:
            return int(code)

    for exc_type, status in EXCEPTION_STATUS_MAP.items():
        if isinstance(error, exc_type):
            return status

    return default


__all__ = [
    "EXCEPTION_STATUS_MAP",
    "AppError",
    "AppValidationError",
    "ConfigurationError",
    "ExceptionMetadata",
    "NotFoundError",
    "UpstreamFailureError",
    "UpstreamShapeError",
    "ValidationError",
    "map_exception_to_status",
]
