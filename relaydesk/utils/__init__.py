"""工具函数包."""
