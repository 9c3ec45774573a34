"""Base Resource helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Response, current_app, request
from flask_restx import Resource

from relaydesk.errors import ValidationError
from relaydesk.services.providers.provider_registry import ProviderTypeRegistry, get_provider_registry
from relaydesk.services.sites.site_directory import SiteDirectory, get_site_directory
from relaydesk.utils.response_utils import jsonify_unified_success


class BaseResource(Resource):
    """统一封套与注册表/站点目录访问."""

    def success(
        self,
        data: object | None = None,
        message: object | None = None,
        *,
        status: int = 200,
        meta: Mapping[str, object] | None = None,
    ) -> tuple[Response, int]:
        return jsonify_unified_success(data=data, message=message, status=status, meta=meta)

    @staticmethod
    def provider_registry() -> ProviderTypeRegistry:
        """按当前应用配置返回缓存的 API 类型注册表."""
        return get_provider_registry(current_app.config.get("PROVIDER_TYPES_CONFIG"))

    @staticmethod
    def site_directory() -> SiteDirectory:
        """按当前应用配置返回缓存的站点目录."""
        return get_site_directory(
            current_app.config.get("SITES_CONFIG"),
            provider_types_config_path=current_app.config.get("PROVIDER_TYPES_CONFIG"),
        )

    @staticmethod
    def json_object_payload() -> dict[str, Any]:
        """读取 JSON 对象请求体, 非对象时抛出 ValidationError."""
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise ValidationError(message_key="JSON_REQUIRED")
        return payload
