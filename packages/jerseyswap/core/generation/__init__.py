"""Generation service clients and provider backends."""

from jerseyswap.core.generation.base import (
    ContentPart,
    GenerationBackend,
    GenerationRequest,
    ProviderType,
)
from jerseyswap.core.generation.client import GenerationClient, first_image_part
from jerseyswap.core.generation.factory import create_generation_client

__all__ = [
    "ContentPart",
    "GenerationBackend",
    "GenerationClient",
    "GenerationRequest",
    "ProviderType",
    "create_generation_client",
    "first_image_part",
]
