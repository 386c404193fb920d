"""File adapters at the edges of the workflow.

load_image_asset turns a user-selected image file into an ImageAsset and
save_image_asset writes a result back to disk. Pillow is only used to
identify the file format; pixels are never modified locally.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from jerseyswap.core.errors import MalformedInputError
from jerseyswap.core.media.data_uri import ImageAsset

logger = logging.getLogger(__name__)

DEFAULT_RESULT_FILENAME = "jersey-swap-result.png"

# Pillow format name -> MIME type for accepted raster formats
SUPPORTED_MIME_TYPES: dict[str, str] = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "BMP": "image/bmp",
}

_EXTENSIONS: dict[str, str] = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
    "image/gif": ".gif",
    "image/bmp": ".bmp",
}


def load_image_asset(path: Path | str) -> ImageAsset:
    """Read an image file into an ImageAsset.

    Args:
        path: Path to a PNG, JPEG, WEBP, GIF or BMP file.

    Returns:
        ImageAsset with the detected MIME type.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedInputError: If the file is not a supported raster image.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image file does not exist: {path}")

    data = path.read_bytes()
    try:
        with Image.open(path) as img:
            image_format = img.format
    except UnidentifiedImageError as e:
        raise MalformedInputError(f"Not a recognised image file: {path}") from e

    mime_type = SUPPORTED_MIME_TYPES.get(image_format or "")
    if mime_type is None:
        raise MalformedInputError(f"Unsupported image format {image_format!r}: {path}")

    logger.debug("Loaded %s (%s, %d bytes)", path, mime_type, len(data))
    return ImageAsset.from_bytes(data, mime_type)


def suggested_extension(asset: ImageAsset) -> str:
    """File extension matching the asset MIME type (default '.png')."""
    return _EXTENSIONS.get(asset.mime_type, ".png")


def save_image_asset(asset: ImageAsset, path: Path | str | None = None) -> Path:
    """Write an asset's decoded bytes to disk.

    Args:
        asset: Image to write.
        path: Destination file. Defaults to DEFAULT_RESULT_FILENAME in the
            current directory.

    Returns:
        Path written.
    """
    output_path = Path(path) if path is not None else Path(DEFAULT_RESULT_FILENAME)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(asset.decode())
    logger.info("Saved result to %s", output_path)
    return output_path
