"""上游请求头构建.

仅计算请求头, 不发起请求; cookie 合并等会话管理不在此处理.
"""

from __future__ import annotations

import json

from relaydesk.constants.provider_types import AuthMethodKey
from relaydesk.services.providers.provider_registry import ProviderTypeRegistry, get_provider_registry

_DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def _parse_sessions(sessions: str) -> tuple[str | None, str | None]:
    """解析 sessions 字段.

    支持两种格式: JSON 对象 ``{"token": ..., "cookie": ...}`` 或原始 cookie 字符串.

    Returns:
        (bearer token, cookie)

    """
    try:
        parsed = json.loads(sessions)
    except ValueError:
        return None, sessions

    if not isinstance(parsed, dict):
        return None, sessions

    token = parsed.get("token")
    cookie = parsed.get("cookie")
    return (
        token if isinstance(token, str) and token else None,
        cookie if isinstance(cookie, str) and cookie else None,
    )


def build_request_headers(
    provider_key: str,
    auth_method: str,
    *,
    token: str | None = None,
    sessions: str | None = None,
    user_id: str | int | None = None,
    registry: ProviderTypeRegistry | None = None,
) -> dict[str, str]:
    """构建访问上游站点所需的请求头.

    Args:
        provider_key: API 类型 key.
        auth_method: 授权方式 key.
        token: token 授权方式下的访问令牌.
        sessions: sessions 授权方式下的会话数据.
        user_id: 用户 ID, 仅在该类型声明了用户 ID 请求头时发送.
        registry: API 类型注册表, 默认使用进程级注册表.

    Returns:
        dict[str, str]: 请求头字典.

    """
    registry = registry or get_provider_registry()
    headers = dict(_DEFAULT_HEADERS)

    if auth_method == AuthMethodKey.TOKEN and token:
        headers["Authorization"] = f"Bearer {token}"
    elif auth_method == AuthMethodKey.SESSIONS and sessions:
        bearer, cookie = _parse_sessions(sessions)
        if bearer:
            headers["Authorization"] = f"Bearer {bearer}"
        if cookie:
            headers["Cookie"] = cookie

    user_id_header = registry.get_user_id_header(provider_key)
    if user_id_header and user_id not in (None, ""):
        headers[user_id_header] = str(user_id)

    return headers


__all__ = ["build_request_headers"]
