"""模型列表响应归一化."""

from __future__ import annotations

from relaydesk.constants.system_constants import ErrorMessages
from relaydesk.errors import AppError, UpstreamShapeError
from relaydesk.services.upstream.response_envelope import require_success_envelope
from relaydesk.services.upstream.token_list_normalizer import build_raw_preview
from relaydesk.types.upstream import ModelsListResult
from relaydesk.utils.structlog_config import get_upstream_logger

logger = get_upstream_logger()


def normalize_models_list(payload: object) -> ModelsListResult:
    """归一化 ``/api/user/models`` 响应, 只接受 data 为数组的形状.

    Args:
        payload: 已解析的上游响应体.

    Returns:
        ModelsListResult: 失败时携带 UpstreamFailureError 或 UpstreamShapeError, 不抛异常.

    """
    try:
        envelope = require_success_envelope(
            payload,
            malformed_message=ErrorMessages.MODELS_LIST_MALFORMED,
            failure_message=ErrorMessages.MODELS_LIST_FAILED,
        )
        data = envelope.get("data")
        if not isinstance(data, (list, tuple)):
            raise UpstreamShapeError(  # noqa: TRY301
                message_key="MODELS_LIST_SHAPE_UNKNOWN",
                extra={"raw_preview": build_raw_preview(data)},
            )
    except AppError as error:
        logger.warning("models_list_normalize_failed", error_type=error.__class__.__name__, error_message=error.message)
        return ModelsListResult(success=False, message=error.message, data=None, error=error)

    models = list(data)
    logger.info("models_list_normalized", count=len(models))
    return ModelsListResult(success=True, message=f"获取到{len(models)}个模型", data=models)


__all__ = ["normalize_models_list"]
