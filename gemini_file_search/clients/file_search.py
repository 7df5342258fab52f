"""Gemini File Search client - list stores and run grounded queries."""

from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

import structlog
from pydantic import ValidationError as PydanticValidationError

from gemini_file_search.clients.base import CredentialResolver
from gemini_file_search.clients.config import PROVIDER, resolve_config
from gemini_file_search.clients.credentials import EnvCredentialResolver
from gemini_file_search.clients.http import execute_request
from gemini_file_search.utils.exceptions import ResponseFormatError, ValidationError
from gemini_file_search.utils.models import (
    STORE_NAME_PREFIX,
    PluginConfig,
    QueryResult,
    Source,
    Store,
)

logger = structlog.get_logger()


def normalize_store_name(name: str) -> str:
    """Expand a short store ID to its ``fileSearchStores/<id>`` resource name."""
    trimmed = name.strip()
    if trimmed.startswith(STORE_NAME_PREFIX):
        return trimmed
    return f"{STORE_NAME_PREFIX}{trimmed}"


class FileSearchClient:
    """
    Client for the Gemini File Search API.

    Every call resolves its credential and configuration afresh; the client
    itself holds nothing but the injected credential resolver, so one
    instance can serve concurrent calls.

    API Docs: https://ai.google.dev/gemini-api/docs/file-search
    """

    def __init__(self, credential_resolver: CredentialResolver | None = None) -> None:
        self._credentials = credential_resolver or EnvCredentialResolver()

    async def list_stores(
        self,
        host_config: Mapping[str, Any] | None = None,
        agent_dir: str | None = None,
        plugin_config: PluginConfig | Mapping[str, Any] | None = None,
    ) -> list[Store]:
        """
        List the File Search stores visible to the resolved API key.

        Args:
            host_config: Host-wide configuration (base URL, headers, key hint)
            agent_dir: Working-directory hint for credential resolution
            plugin_config: Plugin overrides (only the timeout applies here)

        Returns:
            Stores in provider order; empty when the account has none
        """
        api_key = await self._credentials.resolve(PROVIDER, host_config, agent_dir)
        config = resolve_config(api_key, host_config, plugin_config)

        data = await execute_request(
            "GET",
            f"{config.base_url}/fileSearchStores",
            operation="listFileSearchStores",
            headers=config.headers,
            timeout_ms=config.timeout_ms,
            params={"key": api_key},
        )

        raw_stores = data.get("fileSearchStores") if isinstance(data, dict) else None
        if raw_stores is None:
            logger.info("Listed file search stores", base_url=config.base_url, count=0)
            return []
        if not isinstance(raw_stores, list):
            raise ResponseFormatError("Gemini listFileSearchStores returned a non-list store set")

        try:
            stores = [Store.model_validate(item) for item in raw_stores]
        except PydanticValidationError as e:
            raise ResponseFormatError(
                f"Gemini listFileSearchStores returned a malformed store: {e}"
            ) from e

        logger.info("Listed file search stores", base_url=config.base_url, count=len(stores))
        return stores

    async def query(
        self,
        query: str,
        stores: Sequence[str],
        model: str | None = None,
        host_config: Mapping[str, Any] | None = None,
        agent_dir: str | None = None,
        plugin_config: PluginConfig | Mapping[str, Any] | None = None,
    ) -> QueryResult:
        """
        Ask Gemini a question grounded in one or more File Search stores.

        Store names may be short IDs or full resource names. Only the first
        ``max_stores`` stores are searched; the rest are dropped silently.

        Args:
            query: Question text, sent as the sole user message
            stores: Store names or IDs to search
            model: Per-call model override
            host_config: Host-wide configuration
            agent_dir: Working-directory hint for credential resolution
            plugin_config: Plugin overrides (model, store cap, timeout)

        Returns:
            QueryResult with the answer text and grounding sources

        Raises:
            ValidationError: If no usable store name is given
        """
        store_names = [normalize_store_name(s) for s in stores if s and s.strip()]
        if not store_names:
            raise ValidationError("at least one store name is required", field="stores")

        api_key = await self._credentials.resolve(PROVIDER, host_config, agent_dir)
        config = resolve_config(api_key, host_config, plugin_config, model=model)

        if len(store_names) > config.max_stores:
            logger.debug(
                "Truncating store list", requested=len(store_names), max_stores=config.max_stores
            )
            store_names = store_names[: config.max_stores]

        body = {
            "contents": [{"parts": [{"text": query}]}],
            "tools": [{"fileSearch": {"fileSearchStoreNames": store_names}}],
        }

        logger.info("Querying file search", model=config.model, stores=len(store_names))
        data = await execute_request(
            "POST",
            f"{config.base_url}/models/{quote(config.model, safe='')}:generateContent",
            operation="generateContent",
            headers=config.headers,
            timeout_ms=config.timeout_ms,
            params={"key": api_key},
            json_body=body,
        )

        candidate = self._first_candidate(data)
        result = QueryResult(
            answer=self._extract_answer(candidate),
            sources=self._extract_sources(candidate),
        )
        logger.info(
            "File search query complete",
            answer_length=len(result.answer),
            sources=len(result.sources),
        )
        return result

    def _first_candidate(self, data: Any) -> dict[str, Any]:
        """First response candidate, or an empty dict when there is none."""
        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not candidates or not isinstance(candidates, list):
            return {}
        first = candidates[0]
        return first if isinstance(first, dict) else {}

    def _extract_answer(self, candidate: dict[str, Any]) -> str:
        """Concatenate all text parts of the candidate's content."""
        content = candidate.get("content")
        parts = (content.get("parts") if isinstance(content, dict) else None) or []
        texts = [
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        return "".join(texts).strip()

    def _extract_sources(self, candidate: dict[str, Any]) -> list[Source]:
        """Collect retrieved-context citations; chunks with neither URI nor title are skipped."""
        metadata = candidate.get("groundingMetadata")
        chunks = (metadata.get("groundingChunks") if isinstance(metadata, dict) else None) or []

        sources: list[Source] = []
        for chunk in chunks:
            ctx = chunk.get("retrievedContext") if isinstance(chunk, dict) else None
            if not isinstance(ctx, dict):
                continue
            uri = ctx.get("uri") or ""
            title = ctx.get("title") if isinstance(ctx.get("title"), str) else None
            if not uri and not title:
                continue
            # Only a missing title falls back to the URI
            sources.append(Source(title=uri if title is None else title, uri=uri))
        return sources
