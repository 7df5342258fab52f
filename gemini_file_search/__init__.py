"""Gemini File Search - list document stores and run grounded queries."""

from gemini_file_search.clients import CredentialResolver, EnvCredentialResolver, FileSearchClient
from gemini_file_search.utils.exceptions import (
    ApiError,
    CredentialError,
    FileSearchError,
    NetworkError,
    RateLimitError,
    RequestTimeoutError,
    ResponseFormatError,
    ValidationError,
)
from gemini_file_search.utils.models import PluginConfig, QueryResult, Source, Store

__all__ = [
    "ApiError",
    "CredentialError",
    "CredentialResolver",
    "EnvCredentialResolver",
    "FileSearchClient",
    "FileSearchError",
    "NetworkError",
    "PluginConfig",
    "QueryResult",
    "RateLimitError",
    "RequestTimeoutError",
    "ResponseFormatError",
    "Source",
    "Store",
    "ValidationError",
]
