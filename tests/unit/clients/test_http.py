"""Unit tests for the HTTP request executor."""

import asyncio

import httpx
import pytest

from gemini_file_search.clients.http import execute_request
from gemini_file_search.utils.exceptions import (
    ApiError,
    NetworkError,
    RateLimitError,
    RequestTimeoutError,
    ResponseFormatError,
)

URL = "https://generativelanguage.googleapis.com/v1beta/fileSearchStores"


async def _get(**overrides):
    kwargs = {
        "operation": "listFileSearchStores",
        "headers": {"x-goog-api-key": "k"},
        "timeout_ms": 1000,
        "params": {"key": "k"},
    }
    kwargs.update(overrides)
    return await execute_request("GET", URL, **kwargs)


@pytest.mark.unit
class TestExecuteRequest:
    """Tests for execute_request."""

    @pytest.mark.asyncio
    async def test_returns_parsed_json(self, mock_httpx_client, json_response) -> None:
        payload = {"fileSearchStores": [{"name": "fileSearchStores/a"}]}
        mock_httpx_client.request.return_value = json_response(payload)

        assert await _get() == payload

    @pytest.mark.asyncio
    async def test_sends_method_url_headers_and_params(self, mock_httpx_client) -> None:
        await execute_request(
            "POST",
            URL,
            operation="generateContent",
            headers={"Content-Type": "application/json"},
            timeout_ms=1000,
            params={"key": "k"},
            json_body={"contents": []},
        )

        call_args = mock_httpx_client.request.call_args
        assert call_args.args == ("POST", URL)
        assert call_args.kwargs["headers"] == {"Content-Type": "application/json"}
        assert call_args.kwargs["params"] == {"key": "k"}
        assert call_args.kwargs["json"] == {"contents": []}

    @pytest.mark.asyncio
    async def test_non_success_raises_api_error_with_status_and_body(
        self, mock_httpx_client, json_response
    ) -> None:
        mock_httpx_client.request.return_value = json_response({"error": "forbidden"}, 403)

        with pytest.raises(ApiError, match="403") as exc_info:
            await _get()

        assert exc_info.value.status_code == 403
        assert "forbidden" in str(exc_info.value)
        assert "listFileSearchStores" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_429_raises_rate_limit_error(self, mock_httpx_client, json_response) -> None:
        mock_httpx_client.request.return_value = json_response({"error": "quota"}, 429)

        with pytest.raises(RateLimitError, match="429") as exc_info:
            await _get()

        assert isinstance(exc_info.value, ApiError)

    @pytest.mark.asyncio
    async def test_deadline_raises_timeout_error(self, mock_httpx_client) -> None:
        async def slow_request(*args, **kwargs):
            await asyncio.sleep(5)

        mock_httpx_client.request.side_effect = slow_request

        with pytest.raises(RequestTimeoutError, match="10ms"):
            await _get(timeout_ms=10)

    @pytest.mark.asyncio
    async def test_httpx_timeout_raises_timeout_error(self, mock_httpx_client) -> None:
        mock_httpx_client.request.side_effect = httpx.ReadTimeout("read timed out")

        with pytest.raises(RequestTimeoutError) as exc_info:
            await _get()

        assert isinstance(exc_info.value, TimeoutError)
        assert isinstance(exc_info.value, NetworkError)

    @pytest.mark.asyncio
    async def test_connection_failure_raises_network_error(self, mock_httpx_client) -> None:
        mock_httpx_client.request.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(NetworkError) as exc_info:
            await _get()

        assert not isinstance(exc_info.value, RequestTimeoutError)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_response_format_error(
        self, mock_httpx_client, json_response
    ) -> None:
        resp = json_response({})
        resp.json.side_effect = ValueError("Expecting value")
        mock_httpx_client.request.return_value = resp

        with pytest.raises(ResponseFormatError):
            await _get()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failure",
        [httpx.ConnectError("refused"), httpx.ReadTimeout("slow")],
    )
    async def test_client_closed_on_failure(self, mock_httpx_client, failure) -> None:
        mock_httpx_client.request.side_effect = failure

        with pytest.raises(NetworkError):
            await _get()

        mock_httpx_client.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_client_closed_on_api_error(self, mock_httpx_client, json_response) -> None:
        mock_httpx_client.request.return_value = json_response({}, 500)

        with pytest.raises(ApiError):
            await _get()

        mock_httpx_client.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("timeout_ms", [30_000, 1500])
    async def test_client_timeout_matches_deadline(
        self, mocker, mock_httpx_client, timeout_ms: int
    ) -> None:
        client_cls = mocker.patch("httpx.AsyncClient", return_value=mock_httpx_client)

        await _get(timeout_ms=timeout_ms)

        client_cls.assert_called_once_with(timeout=timeout_ms / 1000)

    @pytest.mark.asyncio
    async def test_slow_response_within_deadline_succeeds(
        self, mock_httpx_client, json_response
    ) -> None:
        async def slow_request(*args, **kwargs):
            await asyncio.sleep(0.05)
            return json_response({"ok": True})

        mock_httpx_client.request.side_effect = slow_request

        assert await _get(timeout_ms=5000) == {"ok": True}
