"""Providers namespace: API 类型、授权方式与凭据组合校验."""

from __future__ import annotations

from flask_restx import Namespace, fields

from relaydesk.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from relaydesk.api.v1.resources.base import BaseResource
from relaydesk.constants import HttpStatus
from relaydesk.constants.system_constants import SuccessMessages
from relaydesk.errors import NotFoundError
from relaydesk.services.providers.credential_validation import format_validation_errors, validate_site_credentials
from relaydesk.utils.structlog_config import log_info

ns = Namespace("providers", description="API 类型")

ErrorEnvelope = get_error_envelope_model(ns)

AuthMethodModel = ns.model(
    "AuthMethod",
    {
        "key": fields.String(required=True, example="token"),
        "display_name": fields.String(required=True, example="Token"),
        "description": fields.String(required=True),
    },
)

ProviderOptionModel = ns.model(
    "ProviderTypeOption",
    {
        "value": fields.String(required=True, example="NewApi"),
        "label": fields.String(required=True, example="New API"),
        "description": fields.String(required=True),
    },
)

ProviderListData = ns.model(
    "ProviderTypeListData",
    {
        "provider_types": fields.List(fields.Raw, required=True, description="API 类型详情"),
        "options": fields.List(fields.Nested(ProviderOptionModel), required=True),
        "auth_methods": fields.List(fields.Nested(AuthMethodModel), required=True),
    },
)

AuthMethodCheckData = ns.model(
    "ProviderAuthMethodCheckData",
    {
        "provider_type": fields.String(required=True, example="NewApi"),
        "auth_method": fields.String(required=True, example="token"),
        "supported": fields.Boolean(required=True),
        "requires_user_id": fields.Boolean(required=True),
        "user_id_header": fields.String(required=False, example="new-api-user"),
    },
)

CredentialsValidatePayload = ns.model(
    "SiteCredentialsValidatePayload",
    {
        "api_type": fields.String(required=True, example="NewApi"),
        "auth_method": fields.String(required=True, example="token"),
        "user_id": fields.String(required=False),
        "sessions": fields.String(required=False),
        "token": fields.String(required=False),
    },
)

CredentialsValidateData = ns.model(
    "SiteCredentialsValidateData",
    {
        "is_valid": fields.Boolean(required=True),
        "errors": fields.List(fields.String, required=True),
        "warnings": fields.List(fields.String, required=True),
        "summary": fields.String(required=True),
    },
)

ProviderListSuccessEnvelope = make_success_envelope_model(ns, "ProviderTypeListSuccessEnvelope", ProviderListData)
ProviderDetailSuccessEnvelope = make_success_envelope_model(ns, "ProviderTypeDetailSuccessEnvelope")
AuthMethodCheckSuccessEnvelope = make_success_envelope_model(
    ns, "ProviderAuthMethodCheckSuccessEnvelope", AuthMethodCheckData
)
CredentialsValidateSuccessEnvelope = make_success_envelope_model(
    ns, "SiteCredentialsValidateSuccessEnvelope", CredentialsValidateData
)


def _provider_not_found(provider_key: str) -> NotFoundError:
    return NotFoundError(message_key="PROVIDER_TYPE_NOT_FOUND", extra={"provider_type": provider_key})


@ns.route("")
class ProviderTypesResource(BaseResource):
    @ns.response(200, "OK", ProviderListSuccessEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self):
        registry = self.provider_registry()
        data = {
            "provider_types": [registry.get_recommended_config(key) for key in registry.list_provider_types()],
            "options": registry.list_select_options(),
            "auth_methods": [
                {"key": method.key, "display_name": method.display_name, "description": method.description}
                for method in registry.list_auth_methods()
            ],
        }
        return self.success(data=data, message=SuccessMessages.PROVIDER_TYPES_LOADED)


@ns.route("/<string:provider_key>")
class ProviderTypeDetailResource(BaseResource):
    @ns.response(200, "OK", ProviderDetailSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def get(self, provider_key: str):
        config = self.provider_registry().get_recommended_config(provider_key)
        if config is None:
            raise _provider_not_found(provider_key)
        return self.success(data=config)


@ns.route("/<string:provider_key>/auth-methods/<string:auth_method>")
class ProviderAuthMethodResource(BaseResource):
    @ns.response(200, "OK", AuthMethodCheckSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def get(self, provider_key: str, auth_method: str):
        registry = self.provider_registry()
        if not registry.is_valid_provider_type(provider_key):
            raise _provider_not_found(provider_key)
        return self.success(
            data={
                "provider_type": provider_key,
                "auth_method": auth_method,
                "supported": registry.is_auth_method_supported(provider_key, auth_method),
                "requires_user_id": registry.requires_subject_identifier(provider_key, auth_method),
                "user_id_header": registry.get_user_id_header(provider_key),
            },
        )


@ns.route("/credentials/validate")
class SiteCredentialsValidateResource(BaseResource):
    @ns.expect(CredentialsValidatePayload, validate=False)
    @ns.response(200, "OK", CredentialsValidateSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    def post(self):
        payload = self.json_object_payload()
        result = validate_site_credentials(payload, self.provider_registry())
        summary = format_validation_errors(result)
        log_info(
            "site_credentials_validated",
            module="providers",
            api_type=payload.get("api_type") or payload.get("apiType"),
            is_valid=result.is_valid,
            error_count=len(result.errors),
        )
        message = SuccessMessages.CREDENTIALS_VALID if result.is_valid else summary
        return self.success(data={**result.to_dict(), "summary": summary}, message=message, status=HttpStatus.OK)
