"""External contract adapters/normalizers.

说明:
- 该目录用于收敛上游站点返回的"脏 dict"到 schema 单入口 canonicalization.
- Service 层只做编排, 避免散落 `or` 兜底链与字段/形状兼容逻辑.
"""
