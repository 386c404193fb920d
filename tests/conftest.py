"""Shared pytest fixtures for jerseyswap tests."""

from __future__ import annotations

import base64
from io import BytesIO
from unittest.mock import AsyncMock, MagicMock

from PIL import Image
import pytest

from jerseyswap.core.config.models import ProviderType
from jerseyswap.core.generation.client import GenerationClient
from jerseyswap.core.media.data_uri import ImageAsset

# ============================================================================
# Image Fixtures
# ============================================================================


def make_png_bytes(color: tuple[int, int, int] = (255, 0, 0), size: int = 8) -> bytes:
    """Create a small valid PNG image."""
    img = Image.new("RGB", (size, size), color)
    buf = BytesIO()
    img.save(buf, "PNG")
    return buf.getvalue()


def make_asset(color: tuple[int, int, int] = (255, 0, 0)) -> ImageAsset:
    """Create a PNG ImageAsset of a solid color."""
    return ImageAsset(
        mime_type="image/png",
        payload=base64.b64encode(make_png_bytes(color)).decode("ascii"),
    )


@pytest.fixture
def player_image() -> ImageAsset:
    return make_asset((200, 30, 30))


@pytest.fixture
def jersey_image() -> ImageAsset:
    return make_asset((30, 30, 200))


@pytest.fixture
def background_image() -> ImageAsset:
    return make_asset((30, 200, 30))


@pytest.fixture
def result_image() -> ImageAsset:
    return make_asset((10, 10, 10))


# ============================================================================
# Generation Client Fixtures
# ============================================================================


def make_mock_client(
    result: ImageAsset | None = None,
    side_effect: Exception | list | None = None,
) -> MagicMock:
    """Build a mock GenerationClient with generate as AsyncMock."""
    mock_client = MagicMock(spec=GenerationClient)
    mock_client.model = "test-model"
    mock_client.provider_type = ProviderType.GEMINI
    mock_client.generate = AsyncMock()
    if side_effect is not None:
        mock_client.generate.side_effect = side_effect
    else:
        mock_client.generate.return_value = result if result is not None else make_asset()
    return mock_client
