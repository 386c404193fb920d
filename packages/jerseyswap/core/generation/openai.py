"""OpenAI Images API backend.

Uses images.edit, which accepts several reference images alongside the
prompt (gpt-image-1 family). Each returned data item becomes an image part.
"""

from __future__ import annotations

import logging
from typing import Any

from openai import AsyncOpenAI

from jerseyswap.core.generation.base import ContentPart, GenerationRequest, ProviderType
from jerseyswap.core.media.files import suggested_extension

logger = logging.getLogger(__name__)

_OUTPUT_MIME_TYPES = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
}


class OpenAIImageBackend:
    """Async generation backend for the OpenAI Images API.

    Args:
        client: AsyncOpenAI client instance.
        output_format: Requested output format (png, jpeg or webp).
    """

    def __init__(self, client: AsyncOpenAI, *, output_format: str = "png") -> None:
        if output_format not in _OUTPUT_MIME_TYPES:
            raise ValueError(f"Unsupported output format: {output_format}")
        self._client = client
        self._output_format = output_format

    @classmethod
    def from_api_key(
        cls,
        api_key: str,
        *,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        output_format: str = "png",
    ) -> OpenAIImageBackend:
        """Create a backend with a new SDK client.

        SDK-level retries are disabled; failures surface on the first attempt.
        """
        kwargs: dict[str, Any] = {"api_key": api_key, "max_retries": 0}
        if base_url:
            kwargs["base_url"] = base_url
        if timeout_seconds is not None:
            kwargs["timeout"] = timeout_seconds
        return cls(AsyncOpenAI(**kwargs), output_format=output_format)

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.OPENAI

    async def send(self, request: GenerationRequest) -> list[ContentPart]:
        files = [
            (f"image_{index}{suggested_extension(image)}", image.decode(), image.mime_type)
            for index, image in enumerate(request.images)
        ]

        response = await self._client.images.edit(
            model=request.model,
            image=files,
            prompt=request.instruction,
            output_format=self._output_format,  # type: ignore[arg-type]
        )

        mime_type = _OUTPUT_MIME_TYPES[self._output_format]
        parts: list[ContentPart] = []
        for item in response.data or []:
            if item.b64_json:
                parts.append(ContentPart(mime_type=mime_type, data=item.b64_json))
            elif item.revised_prompt:
                parts.append(ContentPart(text=item.revised_prompt))
            else:
                parts.append(ContentPart())
        return parts
