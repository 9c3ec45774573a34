"""API v1 Resource 基类与解析工具."""
