"""上游统一响应封套 ``{success, message, data}`` 的前置检查."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from relaydesk.errors import UpstreamFailureError

_HTML_MARKERS = ("<html", "<!doctype html")


def looks_like_html(payload: object) -> bool:
    """判断响应是否为 HTML 页面(常见于反爬虫拦截或重新验证页)."""
    if not isinstance(payload, str):
        return False
    lowered = payload.lower()
    return any(marker in lowered for marker in _HTML_MARKERS)


def upstream_message(payload: Mapping[str, Any]) -> str | None:
    """读取上游自带的 message, 非空字符串才有效."""
    message = payload.get("message")
    if isinstance(message, str) and message.strip():
        return message
    return None


def require_success_envelope(
    payload: object,
    *,
    malformed_message: str,
    failure_message: str,
) -> Mapping[str, Any]:
    """确认响应是 success 为真的对象.

    Args:
        payload: 已解析的上游响应体.
        malformed_message: 响应不是对象时使用的文案.
        failure_message: success 为假且上游未给出 message 时的兜底文案.

    Returns:
        Mapping: 原响应对象.

    Raises:
        UpstreamFailureError: 响应不是对象, 或 success 缺失/为假.

    """
    if looks_like_html(payload):
        raise UpstreamFailureError(message_key="UPSTREAM_HTML_RESPONSE")

    if not isinstance(payload, Mapping):
        raise UpstreamFailureError(malformed_message, extra={"payload_type": type(payload).__name__})

    if not payload.get("success"):
        raise UpstreamFailureError(upstream_message(payload) or failure_message)

    return payload


__all__ = [
    "looks_like_html",
    "require_success_envelope",
    "upstream_message",
]
