"""Decode a source image file into an RGBA pixel grid.

Any format Pillow can open is accepted. The image is fully decoded up front
so corrupt or truncated files fail here, before any dithering starts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from bw_dither.core.errors import SourceUndecodable, SourceUnreadable

logger = logging.getLogger(__name__)


@dataclass
class SourceImage:
    """A decoded input image."""

    path: Path
    format: str | None  # Pillow format name, e.g. "PNG"
    pixels: np.ndarray  # (H, W, 4) uint8 RGBA

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]


def _to_rgba8(img: Image.Image) -> Image.Image:
    """Convert to 8-bit RGBA, scaling wide grayscale modes instead of clipping."""
    if img.mode.startswith("I"):
        # I;16 variants and 32-bit I: 0..65535 maps to 0..255
        wide = np.clip(np.array(img, dtype=np.int64), 0, 65535)
        img = Image.fromarray((wide // 257).astype(np.uint8))
    elif img.mode == "F":
        # float samples in [0, 1]
        values = np.clip(np.array(img, dtype=np.float32), 0.0, 1.0)
        img = Image.fromarray(np.rint(values * 255.0).astype(np.uint8))
    return img.convert("RGBA")


def load_image(path: str | Path) -> SourceImage:
    """Open and decode an image file.

    Raises:
        SourceUnreadable: the file is missing, is a directory or can't be read.
        SourceUndecodable: Pillow can't identify or decode the contents, or
            the image is over Pillow's decompression bomb limit.
    """
    path = Path(path)
    if not path.exists():
        raise SourceUnreadable(path, "file not found")
    if path.is_dir():
        raise SourceUnreadable(path, "is a directory")

    try:
        img = Image.open(path)
    except (UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise SourceUndecodable(path, e) from e
    except OSError as e:
        raise SourceUnreadable(path, e) from e

    with img:
        fmt = img.format
        try:
            # Image.open is lazy; force the full decode here
            rgba = _to_rgba8(img)
        except (
            OSError,
            EOFError,
            ValueError,
            SyntaxError,
            Image.DecompressionBombError,
        ) as e:
            raise SourceUndecodable(path, e) from e

    pixels = np.array(rgba, dtype=np.uint8)
    logger.debug("Decoded %s: %s %dx%d", path, fmt, rgba.width, rgba.height)
    return SourceImage(path=path, format=fmt, pixels=pixels)
