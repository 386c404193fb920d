"""Generation client factory for provider dispatch."""

from __future__ import annotations

import logging

from jerseyswap.core.config.models import GenerationConfig
from jerseyswap.core.errors import MissingCredentialError
from jerseyswap.core.generation.base import GenerationBackend, ProviderType
from jerseyswap.core.generation.client import GenerationClient

logger = logging.getLogger(__name__)

_CREDENTIAL_HINTS: dict[ProviderType, str] = {
    ProviderType.GEMINI: "GEMINI_API_KEY",
    ProviderType.OPENAI: "OPENAI_API_KEY",
}


def create_backend(config: GenerationConfig, api_key: str) -> GenerationBackend:
    """Create the configured provider backend."""
    if config.provider is ProviderType.GEMINI:
        from jerseyswap.core.generation.gemini import GeminiBackend

        return GeminiBackend.from_api_key(api_key, timeout_seconds=config.timeout_seconds)

    if config.provider is ProviderType.OPENAI:
        from jerseyswap.core.generation.openai import OpenAIImageBackend

        return OpenAIImageBackend.from_api_key(
            api_key,
            base_url=config.base_url,
            timeout_seconds=config.timeout_seconds,
            output_format=config.output_format,
        )

    raise ValueError(f"Unknown generation provider configured: {config.provider}")


def create_generation_client(config: GenerationConfig) -> GenerationClient:
    """Create a generation client, failing fast when no credential is set.

    The credential is read once here; the client never consults the
    environment afterwards.

    Raises:
        MissingCredentialError: If config.api_key is empty.
    """
    if not config.api_key:
        env_var = _CREDENTIAL_HINTS.get(config.provider, "API key")
        raise MissingCredentialError(f"{env_var} environment variable not set")

    backend = create_backend(config, config.api_key)
    logger.debug(
        "Created %s generation client (model=%s)", config.provider.value, config.resolved_model
    )
    return GenerationClient(backend, model=config.resolved_model)
