"""Image assets: data URI codec plus file input and result output."""

from jerseyswap.core.media.data_uri import ImageAsset, encode, parse
from jerseyswap.core.media.files import (
    DEFAULT_RESULT_FILENAME,
    SUPPORTED_MIME_TYPES,
    load_image_asset,
    save_image_asset,
)

__all__ = [
    "DEFAULT_RESULT_FILENAME",
    "ImageAsset",
    "SUPPORTED_MIME_TYPES",
    "encode",
    "load_image_asset",
    "parse",
    "save_image_asset",
]
