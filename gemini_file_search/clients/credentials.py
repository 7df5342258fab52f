"""Environment-backed credential resolution."""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import SettingsError

from gemini_file_search.clients.config import provider_section
from gemini_file_search.utils.config import Settings, get_settings
from gemini_file_search.utils.exceptions import CredentialError

logger = structlog.get_logger()


class EnvCredentialResolver:
    """
    Resolve API keys from host configuration and the environment.

    Lookup order:
    1. ``models.providers.<provider>.apiKey`` in the host config
    2. ``<agent_dir>/.env`` (GEMINI_API_KEY / GOOGLE_API_KEY); process
       environment variables still take precedence over the file
    3. Process environment and the project ``.env``

    Settings are re-read on every call so a rotated key is picked up
    without restarting.
    """

    def __init__(self, settings_factory: Callable[..., Settings] = get_settings) -> None:
        self._settings_factory = settings_factory

    async def resolve(
        self,
        provider: str,
        host_config: Mapping[str, Any] | None = None,
        agent_dir: str | None = None,
    ) -> str:
        configured = provider_section(host_config, provider).get("apiKey")
        if isinstance(configured, str) and configured.strip():
            logger.debug("Resolved API key", provider=provider, source="host_config")
            return configured.strip()

        if agent_dir:
            agent_env = Path(agent_dir) / ".env"
            if agent_env.is_file():
                key = self._agent_dir_key(agent_env)
                if key:
                    logger.debug("Resolved API key", provider=provider, source="agent_dir")
                    return key

        key = self._key_from(self._settings_factory())
        if key:
            logger.debug("Resolved API key", provider=provider, source="environment")
            return key

        raise CredentialError(
            f'No API key found for provider "{provider}". '
            "Set GEMINI_API_KEY (or GOOGLE_API_KEY) or configure "
            f"models.providers.{provider}.apiKey."
        )

    def _agent_dir_key(self, env_file: Path) -> str | None:
        """Key from an agent .env file; an unparseable file is skipped."""
        try:
            return self._key_from(Settings(_env_file=env_file))
        except PydanticValidationError as e:
            # Field names only; values may hold secrets
            fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
            logger.warning("Ignoring invalid agent .env", path=str(env_file), fields=fields)
            return None
        except SettingsError:
            logger.warning("Ignoring unparseable agent .env", path=str(env_file))
            return None

    @staticmethod
    def _key_from(settings: Settings) -> str | None:
        for candidate in (settings.gemini_api_key, settings.google_api_key):
            if candidate and candidate.strip():
                return candidate.strip()
        return None
