"""Tests for image file input and result output."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from PIL import Image
import pytest

from jerseyswap.core.errors import MalformedInputError
from jerseyswap.core.media.data_uri import ImageAsset
from jerseyswap.core.media.files import (
    DEFAULT_RESULT_FILENAME,
    load_image_asset,
    save_image_asset,
    suggested_extension,
)
from tests.conftest import make_png_bytes


def _write_image(path: Path, fmt: str) -> Path:
    img = Image.new("RGB", (4, 4), (0, 128, 255))
    buf = BytesIO()
    img.save(buf, fmt)
    path.write_bytes(buf.getvalue())
    return path


class TestLoadImageAsset:
    def test_png(self, tmp_path: Path) -> None:
        path = _write_image(tmp_path / "player.png", "PNG")
        asset = load_image_asset(path)
        assert asset.mime_type == "image/png"
        assert asset.decode() == path.read_bytes()

    def test_jpeg_detected_by_content_not_extension(self, tmp_path: Path) -> None:
        path = _write_image(tmp_path / "jersey.png", "JPEG")
        assert load_image_asset(path).mime_type == "image/jpeg"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_image_asset(tmp_path / "nope.png")

    def test_not_an_image(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("not an image")
        with pytest.raises(MalformedInputError):
            load_image_asset(path)

    def test_unsupported_format(self, tmp_path: Path) -> None:
        path = _write_image(tmp_path / "scan.tiff", "TIFF")
        with pytest.raises(MalformedInputError, match="Unsupported image format"):
            load_image_asset(path)


class TestSaveImageAsset:
    def test_writes_decoded_bytes(self, tmp_path: Path) -> None:
        data = make_png_bytes()
        asset = ImageAsset.from_bytes(data, "image/png")
        output = tmp_path / "deep" / "nested" / "result.png"

        written = save_image_asset(asset, output)

        assert written == output
        assert output.read_bytes() == data

    def test_default_filename(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        asset = ImageAsset.from_bytes(make_png_bytes(), "image/png")
        written = save_image_asset(asset)
        assert written.name == DEFAULT_RESULT_FILENAME
        assert (tmp_path / DEFAULT_RESULT_FILENAME).exists()


def test_suggested_extension() -> None:
    assert suggested_extension(ImageAsset(mime_type="image/jpeg", payload="QQ==")) == ".jpg"
    assert suggested_extension(ImageAsset(mime_type="image/x-unknown", payload="QQ==")) == ".png"
