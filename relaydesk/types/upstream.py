"""上游响应归一化结果类型."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from relaydesk.constants.upstream import TokenListShape
    from relaydesk.errors import AppError
    from relaydesk.types.structures import JsonDict, JsonValue, TokenPayload


@dataclass(frozen=True, slots=True)
class TokenListPagination:
    """上游分页信息(仅嵌套数组格式携带)."""

    page: int
    size: int
    total_count: int

    def to_dict(self) -> dict[str, int]:
        return {"page": self.page, "size": self.size, "total_count": self.total_count}


@dataclass(frozen=True, slots=True)
class TokenListMetadata:
    """一次归一化命中的格式信息."""

    shape: TokenListShape
    count: int
    pagination: TokenListPagination | None = None

    def to_dict(self) -> JsonDict:
        return {
            "format": self.shape.value,
            "count": self.count,
            "pagination": self.pagination.to_dict() if self.pagination else None,
        }


@dataclass(frozen=True, slots=True)
class TokenListResult:
    """令牌列表归一化结果.

    成功时 ``data`` 为令牌列表(可能为空), 失败时为 None 且 ``error`` 携带
    UpstreamFailureError/UpstreamShapeError 实例.
    """

    success: bool
    message: str
    data: list[TokenPayload] | None = None
    metadata: TokenListMetadata | None = None
    error: AppError | None = None
    raw_preview: str | None = None

    def to_dict(self) -> JsonDict:
        payload: JsonDict = {
            "success": self.success,
            "message": self.message,
            "data": self.data,
            "metadata": self.metadata.to_dict() if self.metadata else None,
        }
        if self.raw_preview is not None:
            payload["raw_preview"] = self.raw_preview
        return payload


@dataclass(frozen=True, slots=True)
class ModelsListResult:
    """模型列表归一化结果."""

    success: bool
    message: str
    data: list[JsonValue] | None = None
    error: AppError | None = None


@dataclass(frozen=True, slots=True)
class CheckinOutcome:
    """签到响应分类结果."""

    success: bool
    message: str
    kind: str

    def to_dict(self) -> dict[str, object]:
        return {"success": self.success, "message": self.message, "type": self.kind}


@dataclass(frozen=True, slots=True)
class TokenSummary:
    """令牌列表统计."""

    total: int
    enabled: int
    unlimited: int
    never_expiring: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "enabled": self.enabled,
            "unlimited": self.unlimited,
            "never_expiring": self.never_expiring,
        }


@dataclass(slots=True)
class CredentialValidationResult:
    """站点凭据校验结果."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, object]:
        return {"is_valid": self.is_valid, "errors": list(self.errors), "warnings": list(self.warnings)}


__all__ = [
    "CheckinOutcome",
    "CredentialValidationResult",
    "ModelsListResult",
    "TokenListMetadata",
    "TokenListPagination",
    "TokenListResult",
    "TokenSummary",
]
