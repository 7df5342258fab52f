"""Agent tool wrappers for Gemini File Search.

These functions expose the File Search client as agent tools.
Each tool follows the same contract:
- A name, description and JSON Schema for its parameters
- Argument validation before any network call
- Formatted markdown string returns
"""

from collections.abc import Mapping, Sequence
from typing import Any

import structlog
from pydantic import BaseModel, Field

from gemini_file_search.clients.file_search import FileSearchClient
from gemini_file_search.utils.config import settings
from gemini_file_search.utils.exceptions import ValidationError
from gemini_file_search.utils.models import DEFAULT_MODEL, PluginConfig, QueryResult, Store

logger = structlog.get_logger()

LIST_STORES_TOOL = "gemini_file_search_stores"
QUERY_TOOL = "gemini_file_search"


class ListStoresParams(BaseModel):
    """The store listing tool takes no parameters."""


class QueryParams(BaseModel):
    """Parameters of the File Search query tool."""

    query: str = Field(description="Semantic search query.")
    stores: list[str] = Field(
        description=(
            'Store names to search. Accepts full resource names ("fileSearchStores/xxx") '
            'or short IDs ("xxx").'
        )
    )
    model: str | None = Field(
        default=None, description=f"Gemini model override (default: {DEFAULT_MODEL})."
    )


class ToolSpec(BaseModel):
    """Declaration handed to the host when registering a tool."""

    name: str
    description: str
    parameters: dict[str, Any]


TOOL_SPECS: list[ToolSpec] = [
    ToolSpec(
        name=LIST_STORES_TOOL,
        description=(
            "List available Gemini File Search document stores. Returns store names, "
            "display names, and descriptions. Cache the result; stores rarely change "
            "within a session."
        ),
        parameters=ListStoresParams.model_json_schema(),
    ),
    ToolSpec(
        name=QUERY_TOOL,
        description=(
            "Search document stores using Gemini File Search. Returns an AI-generated "
            "answer grounded in the documents, along with source citations. Use "
            f"{LIST_STORES_TOOL} first to discover available store names."
        ),
        parameters=QueryParams.model_json_schema(),
    ),
]


def format_stores(stores: Sequence[Store]) -> str:
    """Render stores as a numbered markdown list."""
    if not stores:
        return "No file search stores found."

    entries = []
    for i, store in enumerate(stores, 1):
        lines = [f"{i}. **{store.label}**", f"   name: `{store.name}`"]
        if store.description:
            lines.append(f"   {store.description}")
        entries.append("\n".join(lines))
    return "\n\n".join(entries)


def format_query_result(result: QueryResult) -> str:
    """Render an answer followed by its numbered sources."""
    lines = [result.answer or "No answer was generated for this query."]

    if result.sources:
        lines.append("")
        lines.append("**Sources:**")
        for i, source in enumerate(result.sources, 1):
            label = source.title or source.uri or "unknown"
            if source.uri:
                lines.append(f"{i}. [{label}]({source.uri})")
            else:
                lines.append(f"{i}. {label}")

    return "\n".join(lines)


class FileSearchTools:
    """
    Tool set bound to one host context.

    Args:
        client: File Search client (a default env-backed one is created if omitted)
        host_config: Host-wide configuration forwarded to every call
        agent_dir: Working-directory hint forwarded to credential resolution
        plugin_config: Plugin overrides (model, store cap, timeout)
    """

    def __init__(
        self,
        client: FileSearchClient | None = None,
        host_config: Mapping[str, Any] | None = None,
        agent_dir: str | None = None,
        plugin_config: PluginConfig | Mapping[str, Any] | None = None,
    ) -> None:
        self.client = client or FileSearchClient()
        self.host_config = host_config
        self.agent_dir = agent_dir
        self.plugin_config = PluginConfig.coerce(plugin_config)

    @property
    def specs(self) -> list[ToolSpec]:
        return TOOL_SPECS

    async def list_stores(self) -> str:
        stores = await self.client.list_stores(
            host_config=self.host_config,
            agent_dir=self.agent_dir,
            plugin_config=self.plugin_config,
        )
        return format_stores(stores)

    async def search(self, query: Any, stores: Any, model: Any = None) -> str:
        """Validate raw tool arguments, run the query and format the answer."""
        query_text = query.strip() if isinstance(query, str) else ""
        if not query_text:
            raise ValidationError("query is required", field="query")

        if isinstance(stores, (list, tuple)) and not all(isinstance(s, str) for s in stores):
            raise ValidationError("store names must be strings", field="stores")
        store_list = []
        if isinstance(stores, (list, tuple)):
            store_list = [s for s in stores if s.strip()]
        if not store_list:
            raise ValidationError("at least one store is required", field="stores")

        model_name = (model.strip() or None) if isinstance(model, str) else None

        result = await self.client.query(
            query_text,
            store_list,
            model=model_name,
            host_config=self.host_config,
            agent_dir=self.agent_dir,
            plugin_config=self.plugin_config,
        )
        return format_query_result(result)

    async def execute(self, name: str, params: Mapping[str, Any] | None = None) -> str:
        """Dispatch a host tool call by name."""
        params = params or {}
        logger.debug("Tool call", tool=name)
        if name == LIST_STORES_TOOL:
            return await self.list_stores()
        if name == QUERY_TOOL:
            return await self.search(params.get("query"), params.get("stores"), params.get("model"))
        raise ValidationError(f"Unknown tool: {name}", field="name")


# Default tool set configured from the environment
_tools = FileSearchTools(host_config=settings.host_config(), plugin_config=settings.plugin_config())


async def gemini_file_search_stores() -> str:
    """List available Gemini File Search document stores.

    Returns store names, display names, and descriptions. Stores rarely
    change within a session, so the result can be reused.

    Returns:
        Numbered markdown list of stores with their resource names
    """
    return await _tools.list_stores()


async def gemini_file_search(query: str, stores: list[str], model: str = "") -> str:
    """Search document stores using Gemini File Search.

    Returns an answer grounded in the documents, along with source citations.
    Call gemini_file_search_stores first to discover store names.

    Args:
        query: Semantic search query (e.g., "How do I rotate API keys?")
        stores: Store names to search; full resource names ("fileSearchStores/xxx")
            or short IDs ("xxx")
        model: Gemini model override (default: gemini-2.5-flash)

    Returns:
        The grounded answer followed by a numbered list of sources
    """
    return await _tools.search(query, stores, model)
