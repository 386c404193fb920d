"""Generation client: one request in, first image out.

Wraps a GenerationBackend, submits instruction text plus ordered images, and
returns the first response part that carries inline image data.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging
import time

from jerseyswap.core.errors import (
    JerseySwapError,
    MissingInputError,
    NoImageReturnedError,
    TransportError,
)
from jerseyswap.core.generation.base import (
    ContentPart,
    GenerationBackend,
    GenerationRequest,
    ProviderType,
)
from jerseyswap.core.media.data_uri import ImageAsset

logger = logging.getLogger(__name__)


def first_image_part(parts: Sequence[ContentPart]) -> ContentPart | None:
    """Return the first part carrying inline image data, or None."""
    for part in parts:
        if part.has_image:
            return part
    return None


class GenerationClient:
    """Submits generation requests through a backend.

    No retries and no timeout enforcement at this layer. Credentials are
    resolved when the backend is built (see create_generation_client).

    Args:
        backend: Provider backend used for the network call.
        model: Model identifier sent with every request.
    """

    def __init__(self, backend: GenerationBackend, *, model: str) -> None:
        self._backend = backend
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    @property
    def provider_type(self) -> ProviderType:
        return self._backend.provider_type

    async def generate(self, instruction_text: str, images: Sequence[ImageAsset]) -> ImageAsset:
        """Generate an image from instruction text and input images.

        Args:
            instruction_text: Natural-language instruction.
            images: Input images, sent in order after the instruction.

        Returns:
            The first image found in the response.

        Raises:
            MissingInputError: If no input image is supplied.
            NoImageReturnedError: If no response part carries image data.
            TransportError: If the backend call fails.
        """
        if not images:
            raise MissingInputError("At least one input image is required")

        request = GenerationRequest(
            model=self._model,
            instruction=instruction_text,
            images=tuple(images),
        )

        logger.debug(
            "Generation request: provider=%s model=%s images=%d prompt_chars=%d",
            self.provider_type.value,
            self._model,
            len(request.images),
            len(instruction_text),
        )

        start = time.perf_counter()
        try:
            parts = await self._backend.send(request)
        except JerseySwapError:
            raise
        except Exception as e:
            raise TransportError("Generation request failed", cause=e) from e
        elapsed_ms = (time.perf_counter() - start) * 1000

        image_part = first_image_part(parts)
        if image_part is None:
            texts = [part.text for part in parts if part.text]
            if texts:
                logger.debug("Response text without image: %s", " | ".join(texts))
            raise NoImageReturnedError(
                "AI failed to generate an image. The response may contain safety "
                "blocks or an unexpected format."
            )

        logger.info(
            "Generation succeeded in %.0fms (%d parts, %s)",
            elapsed_ms,
            len(parts),
            image_part.mime_type,
        )
        # has_image guarantees data is set
        return ImageAsset(
            mime_type=image_part.mime_type or "image/png",
            payload=image_part.data or "",
        )
