"""站点凭据组合校验.

在保存站点前检查 API 类型、授权方式与凭据字段是否匹配, 返回全部错误与警告,
不做短路, 便于前端一次性展示.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import ValidationError as PydanticValidationError

from relaydesk.constants.provider_types import AuthMethodKey
from relaydesk.schemas.site_credentials import SiteCredentialsPayload
from relaydesk.services.providers.provider_registry import ProviderTypeRegistry, get_provider_registry
from relaydesk.types.upstream import CredentialValidationResult


def validate_site_credentials(
    payload: Mapping[str, object] | SiteCredentialsPayload,
    registry: ProviderTypeRegistry | None = None,
) -> CredentialValidationResult:
    """校验站点的 API 类型/授权方式/凭据组合.

    Args:
        payload: 原始请求数据(支持 ``apiType``/``authMethod``/``userId`` 写法)或已解析的 schema.
        registry: API 类型注册表, 默认使用进程级注册表.

    Returns:
        CredentialValidationResult: 错误与警告列表, ``errors`` 为空即通过.

    """
    registry = registry or get_provider_registry()
    result = CredentialValidationResult()

    if isinstance(payload, SiteCredentialsPayload):
        data = payload
    else:
        try:
            data = SiteCredentialsPayload.model_validate(payload)
        except PydanticValidationError:
            result.errors.append("参数格式错误")
            return result

    supported_types = ", ".join(registry.list_provider_types())
    supported_auth = ", ".join(method.key for method in registry.list_auth_methods())

    if not data.api_type:
        result.errors.append("缺少必填字段: apiType")
    elif not registry.is_valid_provider_type(data.api_type):
        result.errors.append(f'无效的API类型 "{data.api_type}"，支持的类型: {supported_types}')

    if not data.auth_method:
        result.errors.append("缺少必填字段: authMethod")
    elif not registry.is_valid_auth_method(data.auth_method):
        result.errors.append(f'无效的授权方法 "{data.auth_method}"，支持的方法: {supported_auth}')

    if (
        data.api_type
        and data.auth_method
        and registry.is_valid_provider_type(data.api_type)
        and registry.is_valid_auth_method(data.auth_method)
    ):
        _check_combination(data, registry, result)

    return result


def _check_combination(
    data: SiteCredentialsPayload,
    registry: ProviderTypeRegistry,
    result: CredentialValidationResult,
) -> None:
    api_type = str(data.api_type)
    auth_method = str(data.auth_method)

    if not registry.is_auth_method_supported(api_type, auth_method):
        provider_type = registry.get_provider_type(api_type)
        supported = ", ".join(provider_type.supported_auth_methods) if provider_type else ""
        result.errors.append(f"{api_type} 不支持 {auth_method} 授权方式，支持的方式: {supported}")
        return

    if registry.requires_subject_identifier(api_type, auth_method) and not data.user_id:
        result.errors.append(f"{api_type} 的 {auth_method} 授权方式必须提供 userId")

    if auth_method == AuthMethodKey.SESSIONS:
        if not data.sessions:
            result.errors.append("sessions 授权方式必须提供有效的 sessions 数据")
        if data.token:
            result.warnings.append("使用 sessions 授权时，token 字段将被忽略")
    elif auth_method == AuthMethodKey.TOKEN:
        if not data.token:
            result.errors.append("token 授权方式必须提供有效的 token 数据")
        if data.sessions:
            result.warnings.append("使用 token 授权时，sessions 字段将被忽略")


def format_validation_errors(result: CredentialValidationResult, context: str = "") -> str:
    """格式化校验结果为单行文案.

    Args:
        result: 校验结果.
        context: 可选前缀, 例如站点名称.

    Returns:
        str: 通过时返回空字符串.

    """
    if result.is_valid:
        return ""

    prefix = f"{context}: " if context else ""
    message = f"{prefix}{'; '.join(result.errors)}"
    if result.warnings:
        message += f" (警告: {'; '.join(result.warnings)})"
    return message


__all__ = ["format_validation_errors", "validate_site_credentials"]
