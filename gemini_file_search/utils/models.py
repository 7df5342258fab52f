"""Data models for Gemini File Search."""

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

logger = structlog.get_logger()

# Fixed provider defaults
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT_MS = 30_000
MAX_STORES_HARD_LIMIT = 5
STORE_NAME_PREFIX = "fileSearchStores/"


class Store(BaseModel):
    """A File Search store as returned by the provider."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = Field(min_length=1, description="Resource name, e.g. fileSearchStores/abc")
    display_name: str | None = Field(default=None, alias="displayName")
    description: str | None = None

    @property
    def label(self) -> str:
        """Human-readable label (display name, falling back to the resource name)."""
        return self.display_name or self.name


class Source(BaseModel):
    """A document that grounded part of an answer."""

    model_config = ConfigDict(frozen=True)

    title: str
    uri: str = ""


class QueryResult(BaseModel):
    """Answer to a File Search query plus its citation sources."""

    answer: str = ""
    sources: list[Source] = Field(default_factory=list)


class EffectiveConfig(BaseModel):
    """Fully-resolved operational parameters for one API call."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    headers: dict[str, str]
    timeout_ms: int = Field(gt=0)
    model: str = Field(min_length=1)
    max_stores: int = Field(ge=1, le=MAX_STORES_HARD_LIMIT)


class PluginConfig(BaseModel):
    """Plugin-level overrides.

    All fields are optional; unset fields fall back to the fixed defaults.
    Raw host payloads use camelCase keys (``defaultModel``,
    ``maxStoresPerQuery``, ``timeoutMs``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    default_model: str | None = Field(default=None, alias="defaultModel")
    max_stores_per_query: int | None = Field(default=None, ge=1, alias="maxStoresPerQuery")
    timeout_ms: int | None = Field(default=None, gt=0, alias="timeoutMs")

    @field_validator("default_model")
    @classmethod
    def _blank_model_is_unset(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @classmethod
    def coerce(cls, raw: "PluginConfig | Mapping[str, Any] | None") -> "PluginConfig":
        """Build a PluginConfig from whatever the host handed us.

        Invalid fields are dropped one by one instead of failing the whole
        config, so a single bad value never blocks a call.
        """
        if raw is None:
            return cls()
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, Mapping):
            logger.warning("Ignoring plugin config", type=type(raw).__name__)
            return cls()

        accepted: dict[str, Any] = {}
        for field_name, field in cls.model_fields.items():
            alias = field.alias or field_name
            if alias in raw:
                value = raw[alias]
            elif field_name in raw:
                value = raw[field_name]
            else:
                continue
            try:
                cls.model_validate({alias: value})
            except PydanticValidationError:
                logger.warning("Ignoring invalid plugin config field", field=alias)
                continue
            accepted[alias] = value

        return cls.model_validate(accepted)
