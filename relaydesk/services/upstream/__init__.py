"""上游响应归一化服务."""

from .checkin_response import classify_checkin_response
from .models_list_normalizer import normalize_models_list
from .token_list_normalizer import (
    TOKEN_LIST_EXTRACTORS,
    normalize_token_list,
    summarize_tokens,
    wrap_token_list,
)

__all__ = [
    "TOKEN_LIST_EXTRACTORS",
    "classify_checkin_response",
    "normalize_models_list",
    "normalize_token_list",
    "summarize_tokens",
    "wrap_token_list",
]
