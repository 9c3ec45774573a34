"""请求日志基础设施."""

from .request_middleware import register_request_logging

__all__ = ["register_request_logging"]
