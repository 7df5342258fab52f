"""Protocols for collaborators injected into the File Search client."""

from collections.abc import Mapping
from typing import Any, Protocol


class CredentialResolver(Protocol):
    """Protocol for anything that can produce a provider API key."""

    async def resolve(
        self,
        provider: str,
        host_config: Mapping[str, Any] | None = None,
        agent_dir: str | None = None,
    ) -> str:
        """
        Resolve an API key for a provider.

        Args:
            provider: Provider identifier (always "google" for File Search)
            host_config: Optional host-wide configuration used as a hint
            agent_dir: Optional working-directory hint

        Returns:
            The API key

        Raises:
            CredentialError: If no usable key can be found
        """
        ...
