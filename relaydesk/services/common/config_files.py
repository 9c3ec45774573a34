"""本地 YAML 配置文件读取."""

from __future__ import annotations

from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import ValidationError as PydanticValidationError

from relaydesk.errors import ConfigurationError
from relaydesk.schemas.base import PayloadSchema
from relaydesk.utils.structlog_config import get_system_logger

logger = get_system_logger()

SchemaT = TypeVar("SchemaT", bound=PayloadSchema)


def read_yaml_config(config_path: str | Path, schema: type[SchemaT], *, config_name: str) -> SchemaT:
    """读取 YAML 配置文件并通过 schema 完成一次性校验.

    Args:
        config_path: 配置文件路径.
        schema: 文件级 schema, 例如 ``ProviderTypesConfigFile``.
        config_name: 配置名称, 用于日志与错误文案.

    Returns:
        校验通过的 schema 实例.

    Raises:
        ConfigurationError: 文件不存在、YAML 语法错误或结构校验失败.

    """
    path = Path(config_path)
    if not path.exists():
        msg = f"{config_name}配置文件不存在: {path}"
        raise ConfigurationError(msg, extra={"path": str(path)})

    try:
        with path.open(encoding="utf-8") as buffer:
            raw_config = yaml.safe_load(buffer) or {}
    except yaml.YAMLError as exc:
        logger.exception("解析配置文件失败", config_name=config_name, path=str(path), error=str(exc))
        msg = f"解析{config_name}配置文件失败: {exc}"
        raise ConfigurationError(msg, extra={"path": str(path)}) from exc

    return validate_config_payload(raw_config, schema, config_name=config_name, source=str(path))


def validate_config_payload(
    raw_config: object,
    schema: type[SchemaT],
    *,
    config_name: str,
    source: str = "<memory>",
) -> SchemaT:
    """将已解析的配置数据交给 schema 校验, pydantic 错误统一转换为 ConfigurationError."""
    try:
        return schema.model_validate(raw_config)
    except PydanticValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in item['loc']) or 'root'}: {item['msg']}" for item in exc.errors()
        )
        msg = f"{config_name}配置校验失败: {details}"
        raise ConfigurationError(msg, extra={"path": source}) from exc


__all__ = ["read_yaml_config", "validate_config_payload"]
