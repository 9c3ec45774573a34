"""类型定义入口."""

from .providers import AuthMethod, ProviderType
from .sites import SiteRecord
from .structures import (
    ContextDict,
    ContextValue,
    JsonDict,
    JsonValue,
    LoggerExtra,
    ScalarValue,
    StructlogEventDict,
    TokenPayload,
)
from .upstream import (
    CheckinOutcome,
    CredentialValidationResult,
    ModelsListResult,
    TokenListMetadata,
    TokenListPagination,
    TokenListResult,
    TokenSummary,
)

__all__ = [
    "AuthMethod",
    "CheckinOutcome",
    "ContextDict",
    "ContextValue",
    "CredentialValidationResult",
    "JsonDict",
    "JsonValue",
    "LoggerExtra",
    "ModelsListResult",
    "ProviderType",
    "ScalarValue",
    "SiteRecord",
    "StructlogEventDict",
    "TokenListMetadata",
    "TokenListPagination",
    "TokenListResult",
    "TokenPayload",
    "TokenSummary",
]
