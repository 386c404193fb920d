"""Tests for the OpenAI Images API backend."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from jerseyswap.core.config.models import ProviderType
from jerseyswap.core.generation.base import ContentPart, GenerationRequest
from jerseyswap.core.generation.openai import OpenAIImageBackend
from jerseyswap.core.media.data_uri import ImageAsset


def _data_item(b64_json: str | None = None, revised_prompt: str | None = None) -> MagicMock:
    item = MagicMock()
    item.b64_json = b64_json
    item.revised_prompt = revised_prompt
    return item


def _make_async_client(data: list[MagicMock] | None) -> MagicMock:
    """Build a mock AsyncOpenAI client with images.edit as AsyncMock."""
    response = MagicMock()
    response.data = data
    mock_client = MagicMock()
    mock_client.images.edit = AsyncMock(return_value=response)
    return mock_client


class TestOpenAIImageBackend:
    @pytest.mark.asyncio
    async def test_send(self, player_image: ImageAsset, jersey_image: ImageAsset) -> None:
        mock_client = _make_async_client([_data_item(b64_json="UkVTVUxU")])
        backend = OpenAIImageBackend(mock_client, output_format="webp")

        parts = await backend.send(
            GenerationRequest(
                model="gpt-image-1",
                instruction="swap it",
                images=(player_image, jersey_image),
            )
        )

        assert parts == [ContentPart(mime_type="image/webp", data="UkVTVUxU")]

        call_kwargs = mock_client.images.edit.call_args.kwargs
        assert call_kwargs["model"] == "gpt-image-1"
        assert call_kwargs["prompt"] == "swap it"
        assert call_kwargs["output_format"] == "webp"
        files = call_kwargs["image"]
        assert [f[0] for f in files] == ["image_0.png", "image_1.png"]
        assert files[0][1] == player_image.decode()
        assert files[1][2] == "image/png"

    @pytest.mark.asyncio
    async def test_items_without_image(self, player_image: ImageAsset) -> None:
        mock_client = _make_async_client(
            [_data_item(revised_prompt="revised"), _data_item(), _data_item(b64_json="QQ==")]
        )
        backend = OpenAIImageBackend(mock_client)

        parts = await backend.send(
            GenerationRequest(model="m", instruction="x", images=(player_image,))
        )

        assert parts == [
            ContentPart(text="revised"),
            ContentPart(),
            ContentPart(mime_type="image/png", data="QQ=="),
        ]

    @pytest.mark.asyncio
    async def test_no_data(self, player_image: ImageAsset) -> None:
        backend = OpenAIImageBackend(_make_async_client(None))
        parts = await backend.send(
            GenerationRequest(model="m", instruction="x", images=(player_image,))
        )
        assert parts == []

    def test_rejects_unknown_output_format(self) -> None:
        with pytest.raises(ValueError):
            OpenAIImageBackend(MagicMock(), output_format="tiff")

    def test_from_api_key_disables_sdk_retries(self) -> None:
        backend = OpenAIImageBackend.from_api_key("sk-test", timeout_seconds=30)
        assert backend._client.max_retries == 0
        assert backend.provider_type is ProviderType.OPENAI
