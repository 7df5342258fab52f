"""HTTP request executor for the Gemini REST API."""

import asyncio
from typing import Any

import httpx
import structlog

from gemini_file_search.utils.exceptions import (
    ApiError,
    NetworkError,
    RateLimitError,
    RequestTimeoutError,
    ResponseFormatError,
)

logger = structlog.get_logger()

HTTP_TOO_MANY_REQUESTS = 429


async def execute_request(
    method: str,
    url: str,
    *,
    operation: str,
    headers: dict[str, str],
    timeout_ms: int,
    params: dict[str, str] | None = None,
    json_body: dict[str, Any] | None = None,
) -> Any:
    """
    Issue one request against the Gemini API under a deadline.

    The deadline covers connect, send and the full body read. The response
    JSON is returned as-is; callers apply their own typing.

    Args:
        method: HTTP method ("GET" or "POST")
        url: Endpoint URL without the query string
        operation: API operation name used in errors and logs
        headers: Request headers
        timeout_ms: Deadline in milliseconds
        params: Query parameters (the API key travels here)
        json_body: JSON request body

    Returns:
        Parsed JSON payload

    Raises:
        RequestTimeoutError: If the deadline elapses first
        NetworkError: If the provider cannot be reached
        RateLimitError: If the provider answers 429
        ApiError: If the provider answers with any other non-success status
        ResponseFormatError: If a success response is not JSON
    """
    timeout_seconds = timeout_ms / 1000

    async with httpx.AsyncClient(timeout=timeout_seconds) as client:
        try:
            async with asyncio.timeout(timeout_seconds):
                response = await client.request(
                    method,
                    url,
                    headers=headers,
                    params=params,
                    json=json_body,
                )
                body_text = response.text
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.warning("Gemini request timed out", operation=operation, timeout_ms=timeout_ms)
            raise RequestTimeoutError(
                f"Gemini {operation} timed out after {timeout_ms}ms"
            ) from e
        except httpx.RequestError as e:
            logger.warning("Gemini request failed", operation=operation, error=type(e).__name__)
            raise NetworkError(f"Gemini {operation} connection failed: {e}") from e

    if not response.is_success:
        logger.warning("Gemini API error", operation=operation, status=response.status_code)
        if response.status_code == HTTP_TOO_MANY_REQUESTS:
            raise RateLimitError(operation, response.status_code, body_text)
        raise ApiError(operation, response.status_code, body_text)

    try:
        return response.json()
    except ValueError as e:
        raise ResponseFormatError(f"Gemini {operation} returned invalid JSON: {e}") from e
