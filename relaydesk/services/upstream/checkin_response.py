"""签到响应分类."""

from __future__ import annotations

from collections.abc import Mapping

from relaydesk.constants.system_constants import ErrorMessages
from relaydesk.constants.upstream import ALREADY_CHECKED_IN_MARKER, CheckinResultKind
from relaydesk.types.upstream import CheckinOutcome
from relaydesk.utils.structlog_config import get_upstream_logger

logger = get_upstream_logger()


def classify_checkin_response(payload: object) -> CheckinOutcome:
    """根据签到接口响应判断结果.

    只有 ``success is True`` 才算成功; 成功但 message 为空或包含"已经签到"时
    视为今日已签到.

    Args:
        payload: 已解析的签到接口响应体.

    Returns:
        CheckinOutcome: 分类结果, ``kind`` 取值见 ``CheckinResultKind``.

    """
    if not isinstance(payload, Mapping):
        logger.warning("checkin_response_malformed", payload_type=type(payload).__name__)
        return CheckinOutcome(
            success=False,
            message=ErrorMessages.CHECKIN_RESPONSE_MALFORMED,
            kind=CheckinResultKind.CHECKIN_FAILED,
        )

    success = payload.get("success") is True
    raw_message = payload.get("message")
    message = raw_message if isinstance(raw_message, str) else ""

    if success and message and ALREADY_CHECKED_IN_MARKER not in message:
        outcome = CheckinOutcome(True, f"签到成功: {message}", CheckinResultKind.CHECKIN_SUCCESS)
    elif success:
        outcome = CheckinOutcome(True, f"今日已签到: {message or '已签到'}", CheckinResultKind.ALREADY_CHECKED_IN)
    else:
        outcome = CheckinOutcome(False, f"签到失败: {message}", CheckinResultKind.CHECKIN_FAILED)

    logger.info("checkin_response_classified", kind=outcome.kind, success=outcome.success)
    return outcome


__all__ = ["classify_checkin_response"]
