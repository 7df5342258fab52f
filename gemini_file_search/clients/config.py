"""Resolve the effective per-call configuration for Gemini requests."""

from collections.abc import Mapping
from typing import Any

import structlog

from gemini_file_search.utils.models import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT_MS,
    MAX_STORES_HARD_LIMIT,
    EffectiveConfig,
    PluginConfig,
)

logger = structlog.get_logger()

PROVIDER = "google"
API_KEY_HEADER = "x-goog-api-key"
# OpenAI-compatible endpoints live under this segment; File Search is not exposed there.
OPENAI_COMPAT_SEGMENT = "/openai"


def provider_section(
    host_config: Mapping[str, Any] | None, provider: str = PROVIDER
) -> Mapping[str, Any]:
    """Return ``models.providers.<provider>`` from a host config, or an empty mapping."""
    node: Any = host_config
    for key in ("models", "providers", provider):
        if not isinstance(node, Mapping):
            return {}
        node = node.get(key)
    return node if isinstance(node, Mapping) else {}


def resolve_base_url(host_config: Mapping[str, Any] | None = None) -> str:
    """Provider base URL with trailing slashes and the OpenAI-compat suffix removed."""
    raw = provider_section(host_config).get("baseUrl")
    if not isinstance(raw, str) or not raw.strip():
        return DEFAULT_BASE_URL

    url = raw.strip().rstrip("/")
    compat_index = url.find(OPENAI_COMPAT_SEGMENT)
    if compat_index > -1:
        url = url[:compat_index]
    return url or DEFAULT_BASE_URL


def build_headers(api_key: str, host_config: Mapping[str, Any] | None = None) -> dict[str, str]:
    """Request headers: JSON content type, host extras, then the API key.

    Host headers may override anything except the API-key header, which is
    always the freshly resolved key.
    """
    headers = {"Content-Type": "application/json"}

    extra = provider_section(host_config).get("headers")
    if isinstance(extra, Mapping):
        for name, value in extra.items():
            if not isinstance(name, str) or not isinstance(value, str):
                continue
            if name.lower() == API_KEY_HEADER:
                logger.warning("Ignoring host override of API key header", header=name)
                continue
            for existing in [h for h in headers if h.lower() == name.lower()]:
                del headers[existing]
            headers[name] = value

    headers[API_KEY_HEADER] = api_key
    return headers


def resolve_model(model: str | None, plugin_config: PluginConfig) -> str:
    """Per-call model, then plugin default, then the fixed default."""
    if model and model.strip():
        return model.strip()
    return plugin_config.default_model or DEFAULT_MODEL


def resolve_max_stores(plugin_config: PluginConfig) -> int:
    """Stores per query; configuration can lower the hard limit but never raise it."""
    requested = plugin_config.max_stores_per_query or MAX_STORES_HARD_LIMIT
    return min(requested, MAX_STORES_HARD_LIMIT)


def resolve_config(
    api_key: str,
    host_config: Mapping[str, Any] | None = None,
    plugin_config: PluginConfig | Mapping[str, Any] | None = None,
    model: str | None = None,
) -> EffectiveConfig:
    """
    Merge host config, plugin config and fixed defaults for one call.

    Never raises: missing or malformed inputs fall back to defaults.

    Args:
        api_key: Freshly resolved provider key
        host_config: Host-wide configuration (``models.providers.google``)
        plugin_config: Plugin overrides (model, store cap, timeout)
        model: Per-call model override

    Returns:
        EffectiveConfig for this call
    """
    plugin = PluginConfig.coerce(plugin_config)
    return EffectiveConfig(
        base_url=resolve_base_url(host_config),
        headers=build_headers(api_key, host_config),
        timeout_ms=plugin.timeout_ms or DEFAULT_TIMEOUT_MS,
        model=resolve_model(model, plugin),
        max_stores=resolve_max_stores(plugin),
    )
