"""Application configuration using Pydantic Settings."""

import logging
from typing import Any, Literal

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_file_search.utils.models import PluginConfig


class Settings(BaseSettings):
    """Strongly-typed application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials
    gemini_api_key: str | None = Field(default=None, description="Google Gemini API key")
    google_api_key: str | None = Field(
        default=None, description="Fallback Google API key (used when GEMINI_API_KEY is unset)"
    )

    # Provider overrides (host-level)
    gemini_base_url: str | None = Field(default=None, description="Gemini API base URL override")
    gemini_headers: dict[str, str] = Field(
        default_factory=dict, description="Extra headers sent with every Gemini request (JSON)"
    )

    # Plugin overrides
    file_search_default_model: str | None = Field(
        default=None, description="Model used when a query does not name one"
    )
    file_search_max_stores_per_query: int | None = Field(
        default=None, description="Stores searched per query (capped at the hard limit)"
    )
    file_search_timeout_ms: int | None = Field(
        default=None, description="Per-request deadline in milliseconds"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @property
    def has_gemini_key(self) -> bool:
        """Check if a Gemini API key is available."""
        return bool(self.gemini_api_key or self.google_api_key)

    def host_config(self) -> dict[str, Any]:
        """Host-shaped configuration for the Gemini provider."""
        google: dict[str, Any] = {}
        if self.gemini_base_url:
            google["baseUrl"] = self.gemini_base_url
        if self.gemini_headers:
            google["headers"] = dict(self.gemini_headers)
        return {"models": {"providers": {"google": google}}}

    def plugin_config(self) -> PluginConfig:
        """Plugin overrides gathered from the environment."""
        return PluginConfig.coerce(
            {
                "defaultModel": self.file_search_default_model,
                "maxStoresPerQuery": self.file_search_max_stores_per_query,
                "timeoutMs": self.file_search_timeout_ms,
            }
        )


def get_settings() -> Settings:
    """Factory function to get settings (allows mocking in tests)."""
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Configure structured logging with the configured log level."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(message)s",
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


# Singleton for easy import
settings = get_settings()
