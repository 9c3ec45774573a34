"""RelayDesk - Flask 应用初始化.

API 中转站点管理面板的适配层: API 类型注册表、上游响应归一化与已知站点目录,
通过 `/api/v1` JSON API 对外提供.
"""

import logging

from flask import Flask, jsonify, request
from flask.typing import ResponseReturnValue

from relaydesk.api import register_api_blueprints
from relaydesk.infra.logging.request_middleware import register_request_logging
from relaydesk.services.providers.provider_registry import get_provider_registry
from relaydesk.services.sites.site_directory import get_site_directory
from relaydesk.settings import Settings
from relaydesk.utils.response_utils import unified_error_response
from relaydesk.utils.structlog_config import (
    ErrorContext,
    configure_structlog,
    get_system_logger,
)


def create_app(*, settings: Settings | None = None) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.

    Returns:
        Flask: Flask应用实例

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__)

    # 配置应用
    configure_app(app, resolved_settings)

    # 配置统一日志系统
    configure_structlog(app)
    log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger().setLevel(getattr(logging, log_level_name, logging.INFO))

    # 请求上下文与 wide event
    register_request_logging(app)

    # 加载静态配置, 配置错误时直接启动失败
    load_static_catalogs(resolved_settings)

    # 注册蓝图
    register_api_blueprints(app, resolved_settings)

    # 注册全局错误处理器
    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        payload, status_code = unified_error_response(error, context=ErrorContext(error, request))
        return jsonify(payload), status_code

    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,包含环境变量解析、默认值与校验结果.

    """
    app.config.from_mapping(settings.to_flask_config())
    app.config.setdefault("APPLICATION_ROOT", "/")
    app.json.ensure_ascii = False  # type: ignore[attr-defined]


def load_static_catalogs(settings: Settings) -> None:
    """加载并缓存 API 类型注册表与站点目录."""
    registry = get_provider_registry(settings.provider_types_config_path)
    directory = get_site_directory(
        settings.sites_config_path,
        provider_types_config_path=settings.provider_types_config_path,
    )
    get_system_logger().info(
        "static_catalogs_ready",
        provider_type_count=len(registry.list_provider_types()),
        site_count=len(directory),
    )


__all__ = ["create_app"]
