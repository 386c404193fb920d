"""Base types and protocol for generation backends."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from jerseyswap.core.config.models import ProviderType
from jerseyswap.core.media.data_uri import ImageAsset

__all__ = ["ContentPart", "GenerationBackend", "GenerationRequest", "ProviderType"]


@dataclass(frozen=True)
class ContentPart:
    """One provider-neutral content part of a generation response.

    A part carries text, inline image data, or neither.
    """

    text: str | None = None
    mime_type: str | None = None
    data: str | None = None  # base64

    @property
    def has_image(self) -> bool:
        """Whether this part carries inline image data."""
        return bool(self.data)


@dataclass(frozen=True)
class GenerationRequest:
    """Standardized generation request.

    Images are sent in order after the instruction text.
    """

    model: str
    instruction: str
    images: tuple[ImageAsset, ...]
    response_modalities: tuple[str, ...] = field(default=("IMAGE", "TEXT"))


class GenerationBackend(Protocol):
    """Protocol for generation service adapters.

    Implementations make exactly one SDK call per send() and must not retry.
    Any SDK or transport failure is allowed to propagate; the client wraps it.
    """

    @property
    def provider_type(self) -> ProviderType:
        """Provider type identifier."""
        ...

    async def send(self, request: GenerationRequest) -> list[ContentPart]:
        """Submit a request and return response parts in response order.

        Args:
            request: Request to submit.

        Returns:
            Ordered content parts (possibly empty).
        """
        ...
