"""服务层公共工具."""

from .config_files import read_yaml_config, validate_config_payload

__all__ = ["read_yaml_config", "validate_config_payload"]
