"""上游响应相关常量."""

from enum import Enum
from typing import ClassVar


class TokenListShape(str, Enum):
    """令牌列表响应的形状标签."""

    RECORDS = "records"  # data.records (分页格式)
    ITEMS = "items"  # data.items (简单格式)
    NESTED_ARRAY = "nested-array"  # data.data (新嵌套格式)
    FLAT_ARRAY = "flat-array"  # data 本身即数组


class CheckinResultKind:
    """签到结果分类."""

    CHECKIN_SUCCESS = "checkin_success"
    ALREADY_CHECKED_IN = "already_checked_in"
    CHECKIN_FAILED = "checkin_failed"

    ALL: ClassVar[tuple[str, ...]] = (CHECKIN_SUCCESS, ALREADY_CHECKED_IN, CHECKIN_FAILED)


class TokenStatus:
    """上游令牌状态码."""

    ENABLED = 1
    DISABLED = 2
    EXPIRED = 3
    EXHAUSTED = 4


# 上游使用 -1 表示永不过期
NEVER_EXPIRES = -1

# 签到提示中表示"今日已签到"的关键字
ALREADY_CHECKED_IN_MARKER = "已经签到"

DEFAULT_RAW_PREVIEW_CHARS = 2000

__all__ = [
    "ALREADY_CHECKED_IN_MARKER",
    "DEFAULT_RAW_PREVIEW_CHARS",
    "NEVER_EXPIRES",
    "CheckinResultKind",
    "TokenListShape",
    "TokenStatus",
]
