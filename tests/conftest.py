"""Shared pytest fixtures for all tests."""

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from gemini_file_search.clients.file_search import FileSearchClient


class StaticCredentialResolver:
    """Credential resolver that always returns the same key and records calls."""

    def __init__(self, api_key: str = "test-api-key") -> None:
        self.api_key = api_key
        self.calls: list[tuple[str, Any, Any]] = []

    async def resolve(self, provider, host_config=None, agent_dir=None) -> str:
        self.calls.append((provider, host_config, agent_dir))
        return self.api_key


@pytest.fixture
def json_response():
    """Factory fixture building a mocked httpx.Response."""

    def _make(data: Any, status: int = 200) -> MagicMock:
        resp = MagicMock()
        resp.status_code = status
        resp.is_success = 200 <= status < 300
        resp.text = json.dumps(data)
        resp.json.return_value = data
        return resp

    return _make


@pytest.fixture
def mock_httpx_client(mocker, json_response):
    """Mock httpx.AsyncClient for API tests; ``request`` returns an empty JSON body."""
    client = AsyncMock()
    client.__aenter__.return_value = client
    client.__aexit__.return_value = None
    client.request.return_value = json_response({})
    mocker.patch("httpx.AsyncClient", return_value=client)
    return client


@pytest.fixture
def credential_resolver() -> StaticCredentialResolver:
    return StaticCredentialResolver()


@pytest.fixture
def file_search_client(credential_resolver) -> FileSearchClient:
    return FileSearchClient(credential_resolver=credential_resolver)
