"""Data URI codec for image assets.

An image travels through the system as a self-describing data URI
(``data:<mime>;base64,<payload>``). ImageAsset is the decomposed form.
"""

from __future__ import annotations

import base64
import binascii
import re

from pydantic import BaseModel, ConfigDict, Field

from jerseyswap.core.errors import MalformedInputError

# MIME type used when the prefix does not match but a payload is present
FALLBACK_MIME_TYPE = "image/jpeg"

_MIME_PATTERN = re.compile(r":(?P<mime>[^;]*?);")


class ImageAsset(BaseModel):
    """An image as a MIME type plus base64 payload.

    Immutable once created; a new upload or result supersedes an asset
    rather than modifying it.

    Attributes:
        mime_type: Image MIME type (e.g. 'image/png').
        payload: Base64-encoded image bytes.
    """

    model_config = ConfigDict(frozen=True)

    mime_type: str = Field(min_length=1)
    payload: str = Field(min_length=1, repr=False)

    @classmethod
    def from_data_uri(cls, uri: str) -> ImageAsset:
        """Build an asset from a data URI string."""
        return parse(uri)

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str) -> ImageAsset:
        """Build an asset from raw image bytes."""
        return cls(mime_type=mime_type, payload=base64.b64encode(data).decode("ascii"))

    def to_data_uri(self) -> str:
        """Render the asset as a data URI."""
        return encode(self.mime_type, self.payload)

    def decode(self) -> bytes:
        """Decode the payload to raw bytes.

        Raises:
            MalformedInputError: If the payload is not valid base64.
        """
        try:
            return base64.b64decode(self.payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedInputError(f"Invalid base64 payload: {e}") from e

    @property
    def size_bytes(self) -> int:
        """Approximate decoded size, without decoding."""
        padding = self.payload.count("=", -2)
        return len(self.payload) * 3 // 4 - padding


def parse(uri: str) -> ImageAsset:
    """Parse a data URI into an ImageAsset.

    Splits on the first comma and extracts the MIME type from the
    ``data:<mime>;base64`` prefix. When the prefix does not match but a
    payload is present, the MIME type falls back to image/jpeg.

    Args:
        uri: Data URI string.

    Returns:
        Parsed ImageAsset.

    Raises:
        MalformedInputError: If there is no comma separator or the payload
            segment is empty.

    Example:
        >>> parse("data:image/png;base64,iVBORw0KGgo=").mime_type
        'image/png'
    """
    header, sep, payload = uri.partition(",")
    if not sep:
        raise MalformedInputError("Invalid data URL: missing ',' separator")
    if not payload:
        raise MalformedInputError("Invalid data URL: empty payload")

    match = _MIME_PATTERN.search(header)
    mime_type = match.group("mime") if match and match.group("mime") else FALLBACK_MIME_TYPE

    return ImageAsset(mime_type=mime_type, payload=payload)


def encode(mime_type: str, payload: str) -> str:
    """Build a data URI from a MIME type and base64 payload.

    Args:
        mime_type: Image MIME type.
        payload: Base64-encoded bytes.

    Returns:
        Data URI string.
    """
    return f"data:{mime_type};base64,{payload}"
