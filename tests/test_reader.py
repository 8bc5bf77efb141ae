"""Tests for the source image reader."""

import numpy as np
import pytest
from PIL import Image

from bw_dither.core.errors import SourceUndecodable, SourceUnreadable
from bw_dither.core.reader import SourceImage, load_image


@pytest.fixture
def sample_png(tmp_path):
    img = Image.new("RGB", (5, 3), (200, 10, 10))
    path = tmp_path / "sample.png"
    img.save(str(path))
    return path


class TestLoadImage:
    def test_decodes_to_rgba(self, sample_png):
        source = load_image(sample_png)

        assert isinstance(source, SourceImage)
        assert source.format == "PNG"
        assert source.pixels.shape == (3, 5, 4)
        assert source.pixels.dtype == np.uint8
        assert (source.width, source.height) == (5, 3)
        assert source.pixels[0, 0].tolist() == [200, 10, 10, 255]

    def test_accepts_str_path(self, sample_png):
        source = load_image(str(sample_png))
        assert source.path == sample_png

    def test_palette_image(self, tmp_path):
        path = tmp_path / "pal.gif"
        Image.new("P", (4, 4), 0).save(str(path))
        source = load_image(path)
        assert source.format == "GIF"
        assert source.pixels.shape == (4, 4, 4)

    def test_file_not_found(self, tmp_path):
        missing = tmp_path / "nope.png"
        with pytest.raises(SourceUnreadable) as exc_info:
            load_image(missing)
        assert exc_info.value.path == missing
        assert exc_info.value.code == "SOURCE_UNREADABLE"
        assert "nope.png" in str(exc_info.value)

    def test_directory(self, tmp_path):
        with pytest.raises(SourceUnreadable, match="is a directory"):
            load_image(tmp_path)

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "notes.png"
        path.write_bytes(b"this is not an image")
        with pytest.raises(SourceUndecodable) as exc_info:
            load_image(path)
        assert exc_info.value.code == "SOURCE_UNDECODABLE"
        assert exc_info.value.cause is not None

    def test_truncated_image(self, tmp_path):
        rng = np.random.default_rng(0)
        noise = rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8)
        full = tmp_path / "full.png"
        Image.fromarray(noise).save(str(full))

        truncated = tmp_path / "truncated.png"
        truncated.write_bytes(full.read_bytes()[:2000])
        with pytest.raises(SourceUndecodable):
            load_image(truncated)

    def test_decompression_bomb(self, tmp_path, monkeypatch):
        path = tmp_path / "large.png"
        Image.new("RGB", (64, 64), (0, 0, 0)).save(str(path))
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        with pytest.raises(SourceUndecodable) as exc_info:
            load_image(path)
        assert isinstance(exc_info.value.cause, Image.DecompressionBombError)


class TestWideModes:
    def test_16bit_grayscale_is_scaled(self, tmp_path):
        path = tmp_path / "scan16.png"
        Image.fromarray(np.full((4, 4), 30000, dtype=np.uint16)).save(str(path))

        source = load_image(path)
        assert source.pixels.shape == (4, 4, 4)
        assert source.pixels[0, 0].tolist() == [116, 116, 116, 255]

    def test_16bit_range_ends(self, tmp_path):
        path = tmp_path / "ramp16.png"
        Image.fromarray(np.array([[0, 65535]], dtype=np.uint16)).save(str(path))

        source = load_image(path)
        assert source.pixels[0, :, 0].tolist() == [0, 255]

    def test_float_image_is_scaled(self, tmp_path):
        path = tmp_path / "float.tif"
        values = np.array([[0.0, 0.5, 1.0]], dtype=np.float32)
        Image.fromarray(values).save(str(path))

        source = load_image(path)
        assert source.pixels[0, :, 0].tolist() == [0, 128, 255]
