"""Tokens namespace: 上游令牌列表响应归一化.

请求体统一为 ``{"payload": <上游原始响应>}``, 上游响应可以是任意 JSON 值
(包括 HTML 字符串), 归一化失败时以 502 错误封套返回.
"""

from __future__ import annotations

from typing import Any

from flask import current_app
from flask_restx import Namespace, fields

from relaydesk.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from relaydesk.api.v1.resources.base import BaseResource
from relaydesk.errors import ValidationError
from relaydesk.services.upstream.token_list_normalizer import normalize_token_list, summarize_tokens
from relaydesk.types.upstream import TokenListResult

ns = Namespace("tokens", description="令牌列表归一化")

ErrorEnvelope = get_error_envelope_model(ns)

NormalizePayload = ns.model(
    "TokenListNormalizePayload",
    {
        "payload": fields.Raw(required=True, description="上游令牌列表接口的原始响应"),
    },
)

PaginationModel = ns.model(
    "TokenListPagination",
    {
        "page": fields.Integer(required=True),
        "size": fields.Integer(required=True),
        "total_count": fields.Integer(required=True),
    },
)

MetadataModel = ns.model(
    "TokenListMetadata",
    {
        "format": fields.String(required=True, example="records"),
        "count": fields.Integer(required=True),
        "pagination": fields.Nested(PaginationModel, allow_null=True),
    },
)

NormalizeData = ns.model(
    "TokenListNormalizeData",
    {
        "success": fields.Boolean(required=True),
        "message": fields.String(required=True),
        "data": fields.List(fields.Raw, required=True),
        "metadata": fields.Nested(MetadataModel, required=True),
    },
)

SummaryData = ns.model(
    "TokenSummaryData",
    {
        "total": fields.Integer(required=True),
        "enabled": fields.Integer(required=True),
        "unlimited": fields.Integer(required=True),
        "never_expiring": fields.Integer(required=True),
        "metadata": fields.Nested(MetadataModel, required=True),
    },
)

NormalizeSuccessEnvelope = make_success_envelope_model(ns, "TokenListNormalizeSuccessEnvelope", NormalizeData)
SummarySuccessEnvelope = make_success_envelope_model(ns, "TokenSummarySuccessEnvelope", SummaryData)


def _normalize_request(body: dict[str, Any]) -> TokenListResult:
    if "payload" not in body:
        raise ValidationError("缺少必填字段: payload")

    preview_limit = current_app.config.get("UPSTREAM_DEBUG_PREVIEW_CHARS")
    result = normalize_token_list(
        body["payload"],
        preview_limit=preview_limit if isinstance(preview_limit, int) else None,
    )
    if not result.success and result.error is not None:
        raise result.error
    return result


@ns.route("/normalize")
class TokenListNormalizeResource(BaseResource):
    @ns.expect(NormalizePayload, validate=False)
    @ns.response(200, "OK", NormalizeSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(502, "Bad Gateway", ErrorEnvelope)
    def post(self):
        result = _normalize_request(self.json_object_payload())
        return self.success(data=result.to_dict(), message=result.message)


@ns.route("/summary")
class TokenSummaryResource(BaseResource):
    @ns.expect(NormalizePayload, validate=False)
    @ns.response(200, "OK", SummarySuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(502, "Bad Gateway", ErrorEnvelope)
    def post(self):
        result = _normalize_request(self.json_object_payload())
        summary = summarize_tokens(result.data or [])
        metadata = result.metadata.to_dict() if result.metadata else None
        return self.success(data={**summary.to_dict(), "metadata": metadata}, message=result.message)
