"""令牌列表响应归一化.

不同上游家族的"获取令牌列表"接口返回的列表位置各不相同:

- ``data.records``  分页格式
- ``data.items``    简单格式
- ``data.data``     新嵌套格式, 可能附带 page/size/total_count
- ``data``          数组直接位于 data

`normalize_token_list` 按固定优先级依次尝试, 命中第一个即返回统一结构.
令牌记录本身原样透传, 不做字段校验.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from relaydesk.constants.system_constants import ErrorMessages
from relaydesk.constants.upstream import DEFAULT_RAW_PREVIEW_CHARS, TokenListShape
from relaydesk.errors import AppError, UpstreamShapeError
from relaydesk.schemas.external_contracts.upstream_token import UpstreamTokenSchema
from relaydesk.services.upstream.response_envelope import require_success_envelope
from relaydesk.types.upstream import TokenListMetadata, TokenListPagination, TokenListResult, TokenSummary
from relaydesk.utils.structlog_config import get_upstream_logger

logger = get_upstream_logger()

TokenExtractor = Callable[[Any], list[Any] | None]


def _is_json_array(value: object) -> bool:
    # str/bytes 也是 Sequence, 但不是 JSON 数组
    return isinstance(value, (list, tuple))


def _nested_list(field_name: str) -> TokenExtractor:
    def extract(data: Any) -> list[Any] | None:
        if not isinstance(data, Mapping):
            return None
        value = data.get(field_name)
        return list(value) if _is_json_array(value) else None

    extract.__name__ = f"extract_{field_name}"
    return extract


def _flat_list(data: Any) -> list[Any] | None:
    return list(data) if _is_json_array(data) else None


# 检测优先级, 顺序即语义
TOKEN_LIST_EXTRACTORS: tuple[tuple[TokenListShape, TokenExtractor], ...] = (
    (TokenListShape.RECORDS, _nested_list("records")),
    (TokenListShape.ITEMS, _nested_list("items")),
    (TokenListShape.NESTED_ARRAY, _nested_list("data")),
    (TokenListShape.FLAT_ARRAY, _flat_list),
)


def _extract_pagination(data: Any) -> TokenListPagination | None:
    if not isinstance(data, Mapping):
        return None
    values = [data.get(name) for name in ("page", "size", "total_count")]
    if not all(isinstance(value, int) and not isinstance(value, bool) for value in values):
        return None
    page, size, total_count = values
    return TokenListPagination(page=page, size=size, total_count=total_count)


def build_raw_preview(data: object, limit: int = DEFAULT_RAW_PREVIEW_CHARS) -> str:
    """渲染截断后的原始数据片段, 仅用于排障.

    按块编码, 已满 ``limit`` 个字符即停止. 循环引用或嵌套过深无法编码时
    只返回类型名, 如 ``<dict>``.
    """
    limit = max(limit, 0)
    encoder = json.JSONEncoder(ensure_ascii=False, default=str)
    chunks: list[str] = []
    rendered_size = 0
    try:
        for chunk in encoder.iterencode(data):
            if rendered_size >= limit:
                break
            chunks.append(chunk)
            rendered_size += len(chunk)
    except (TypeError, ValueError, RecursionError):
        return f"<{type(data).__name__}>"[:limit]
    return "".join(chunks)[:limit]


def normalize_token_list(payload: object, *, preview_limit: int | None = None) -> TokenListResult:
    """把任意已知形状的令牌列表响应归一化为统一结构.

    Args:
        payload: 已解析的上游响应体, 可以是任意值.
        preview_limit: 格式无法识别时 raw_preview 的最大字符数.

    Returns:
        TokenListResult: 成功时 data 为令牌列表(可能为空), 失败时携带
        UpstreamFailureError 或 UpstreamShapeError. 本函数不抛异常.

    """
    limit = preview_limit if preview_limit is not None else DEFAULT_RAW_PREVIEW_CHARS
    try:
        envelope = require_success_envelope(
            payload,
            malformed_message=ErrorMessages.TOKEN_LIST_MALFORMED,
            failure_message=ErrorMessages.TOKEN_LIST_FAILED,
        )
    except AppError as error:
        return _failed(error)

    data = envelope.get("data")
    for shape, extractor in TOKEN_LIST_EXTRACTORS:
        tokens = extractor(data)
        if tokens is None:
            continue

        pagination = _extract_pagination(data) if shape is TokenListShape.NESTED_ARRAY else None
        metadata = TokenListMetadata(shape=shape, count=len(tokens), pagination=pagination)
        logger.info(
            "token_list_normalized",
            shape=shape.value,
            count=metadata.count,
            has_pagination=pagination is not None,
        )
        return TokenListResult(
            success=True,
            message=f"获取到{metadata.count}个令牌 (使用{shape.value}格式)",
            data=tokens,
            metadata=metadata,
        )

    raw_preview = build_raw_preview(data, limit)
    error = UpstreamShapeError(extra={"raw_preview": raw_preview})
    return _failed(error, raw_preview=raw_preview)


def _failed(error: AppError, *, raw_preview: str | None = None) -> TokenListResult:
    logger.warning(
        "token_list_normalize_failed",
        error_type=error.__class__.__name__,
        error_message=error.message,
        raw_preview_length=len(raw_preview) if raw_preview is not None else None,
    )
    return TokenListResult(
        success=False,
        message=error.message,
        data=None,
        error=error,
        raw_preview=raw_preview,
    )


def wrap_token_list(
    tokens: Sequence[Any],
    shape: TokenListShape,
    *,
    pagination: TokenListPagination | None = None,
) -> dict[str, Any]:
    """把令牌列表按指定形状重新包装成上游响应.

    ``normalize_token_list(wrap_token_list(tokens, shape))`` 会原样取回 ``tokens``.
    """
    items = list(tokens)
    if shape is TokenListShape.RECORDS:
        data: Any = {"records": items}
    elif shape is TokenListShape.ITEMS:
        data = {"items": items}
    elif shape is TokenListShape.NESTED_ARRAY:
        data = {"data": items}
        if pagination is not None:
            data.update(pagination.to_dict())
    else:
        data = items
    return {"success": True, "message": "", "data": data}


def summarize_tokens(tokens: Iterable[Any]) -> TokenSummary:
    """统计令牌列表.

    非对象元素只计入总数.
    """
    total = enabled = unlimited = never_expiring = 0
    for item in tokens:
        total += 1
        if not isinstance(item, Mapping):
            continue
        token = UpstreamTokenSchema.model_validate(dict(item))
        enabled += int(token.is_enabled)
        unlimited += int(token.unlimited_quota)
        never_expiring += int(token.never_expires)
    return TokenSummary(total=total, enabled=enabled, unlimited=unlimited, never_expiring=never_expiring)


__all__ = [
    "TOKEN_LIST_EXTRACTORS",
    "build_raw_preview",
    "normalize_token_list",
    "summarize_tokens",
    "wrap_token_list",
]
