"""Sites namespace: 已知站点目录查询."""

from __future__ import annotations

from typing import cast

from flask_restx import Namespace, fields

from relaydesk.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from relaydesk.api.v1.resources.base import BaseResource
from relaydesk.api.v1.resources.query_parsers import new_parser
from relaydesk.constants.system_constants import SuccessMessages
from relaydesk.errors import NotFoundError

ns = Namespace("sites", description="已知站点目录")

ErrorEnvelope = get_error_envelope_model(ns)

SiteModel = ns.model(
    "SiteRecord",
    {
        "provider_type": fields.String(required=True, example="NewApi"),
        "name": fields.String(required=True, example="InstCopilot"),
        "url": fields.String(required=True, example="https://instcopilot-api.com"),
        "affiliate_path": fields.String(required=True, example="/register?aff=xFc4"),
        "registration_url": fields.String(required=True),
        "is_default": fields.Boolean(required=True),
    },
)

SiteListData = ns.model(
    "SiteListData",
    {
        "sites": fields.List(fields.Nested(SiteModel), required=True),
        "total": fields.Integer(required=True),
    },
)

SiteListSuccessEnvelope = make_success_envelope_model(ns, "SiteListSuccessEnvelope", SiteListData)
SiteDetailSuccessEnvelope = make_success_envelope_model(ns, "SiteDetailSuccessEnvelope", SiteModel)

_sites_query_parser = new_parser()
_sites_query_parser.add_argument("search", type=str, default="", location="args")
_sites_query_parser.add_argument("provider_type", type=str, default="", location="args")


@ns.route("")
class SitesResource(BaseResource):
    @ns.expect(_sites_query_parser)
    @ns.response(200, "OK", SiteListSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    def get(self):
        parsed = cast("dict[str, object]", _sites_query_parser.parse_args())
        keyword = str(parsed.get("search") or "")
        provider_type = str(parsed.get("provider_type") or "").strip()

        records = self.site_directory().search(keyword)
        if provider_type:
            records = tuple(record for record in records if record.provider_type == provider_type)

        return self.success(
            data={"sites": [record.to_dict() for record in records], "total": len(records)},
            message=SuccessMessages.SITES_LOADED,
        )


@ns.route("/defaults/<string:provider_key>")
class SiteDefaultResource(BaseResource):
    @ns.response(200, "OK", SiteDetailSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def get(self, provider_key: str):
        if not self.provider_registry().is_valid_provider_type(provider_key):
            raise NotFoundError(message_key="PROVIDER_TYPE_NOT_FOUND", extra={"provider_type": provider_key})

        record = self.site_directory().get_default_for_type(provider_key)
        if record is None:
            raise NotFoundError(message_key="DEFAULT_SITE_NOT_FOUND", extra={"provider_type": provider_key})
        return self.success(data=record.to_dict())
