"""Gemini File Search API client package."""

from gemini_file_search.clients.base import CredentialResolver
from gemini_file_search.clients.credentials import EnvCredentialResolver
from gemini_file_search.clients.file_search import FileSearchClient, normalize_store_name

# Re-export the client surface
__all__ = [
    "CredentialResolver",
    "EnvCredentialResolver",
    "FileSearchClient",
    "normalize_store_name",
]
