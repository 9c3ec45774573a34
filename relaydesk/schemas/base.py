"""Schema 基础设施."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PayloadSchema(BaseModel):
    """写路径 payload 的基础 schema.

    约定:
    - 默认忽略未知字段, 以兼容前端/上游的扩展字段.
    - schema 负责形状规整与错误文案(中文), 业务规则由 service 层判断.
    """

    model_config = ConfigDict(extra="ignore")
