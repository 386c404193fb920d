"""Gemini backend using the google-genai SDK.

Sends instruction text plus inline images to generate_content with IMAGE and
TEXT response modalities and flattens the first candidate's parts.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from google import genai
from google.genai import types

from jerseyswap.core.generation.base import ContentPart, GenerationRequest, ProviderType

logger = logging.getLogger(__name__)


def _to_content_part(part: Any) -> ContentPart:
    inline = getattr(part, "inline_data", None)
    if inline is not None and inline.data:
        raw = inline.data
        data = raw if isinstance(raw, str) else base64.b64encode(raw).decode("ascii")
        return ContentPart(mime_type=inline.mime_type or "image/png", data=data)
    return ContentPart(text=getattr(part, "text", None))


def response_parts(response: Any) -> list[ContentPart]:
    """Flatten a GenerateContentResponse into neutral parts.

    Only the first candidate is inspected. A response with no candidates or
    no content (e.g. blocked by safety filters) yields an empty list.
    """
    candidates = getattr(response, "candidates", None)
    if not candidates:
        feedback = getattr(response, "prompt_feedback", None)
        if feedback is not None:
            logger.warning("Gemini returned no candidates: %s", feedback)
        return []

    content = candidates[0].content
    if content is None or not content.parts:
        logger.warning(
            "Gemini candidate has no content (finish_reason=%s)",
            getattr(candidates[0], "finish_reason", None),
        )
        return []

    return [_to_content_part(part) for part in content.parts]


class GeminiBackend:
    """Async generation backend for Gemini image models.

    Args:
        client: google-genai Client instance.
    """

    def __init__(self, client: genai.Client) -> None:
        self._client = client

    @classmethod
    def from_api_key(cls, api_key: str, *, timeout_seconds: float | None = None) -> GeminiBackend:
        """Create a backend with a new SDK client."""
        http_options = None
        if timeout_seconds is not None:
            # HttpOptions.timeout is in milliseconds
            http_options = types.HttpOptions(timeout=int(timeout_seconds * 1000))
        return cls(genai.Client(api_key=api_key, http_options=http_options))

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.GEMINI

    async def send(self, request: GenerationRequest) -> list[ContentPart]:
        contents: list[Any] = [types.Part.from_text(text=request.instruction)]
        for image in request.images:
            contents.append(types.Part.from_bytes(data=image.decode(), mime_type=image.mime_type))

        response = await self._client.aio.models.generate_content(
            model=request.model,
            contents=contents,
            config=types.GenerateContentConfig(
                response_modalities=list(request.response_modalities),
            ),
        )
        return response_parts(response)
