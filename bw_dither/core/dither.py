"""Error diffusion driver for 1-bit output."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

from bw_dither.core.buffer import ErrorBuffer
from bw_dither.core.kernels import KERNELS, Kernel, to_pixel


@dataclass
class DitherResult:
    """Output of one kernel pass."""

    label: str
    pixels: np.ndarray  # (H, W) uint8, only 0 and 255

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def to_image(self) -> Image.Image:
        # 2D uint8 arrays map to mode "L"
        return Image.fromarray(self.pixels)


def dither_buffer(buffer: ErrorBuffer, kernel: Kernel) -> np.ndarray:
    """Run one diffusion pass over ``buffer``, mutating it in place.

    Columns are the outer loop and rows the inner one: every row of column 0
    is visited before column 1.

    Returns:
        (H, W) uint8 array of 0 (black) and 255 (white).
    """
    w, h = buffer.width, buffer.height
    out = np.zeros((h, w), dtype=np.uint8)

    for x in range(w):
        for y in range(h):
            out[y, x] = to_pixel(kernel.diffuse(buffer, x, y))

    return out


def dither(pixels: np.ndarray, kernel: Kernel) -> DitherResult:
    """Dither an (H, W, 4) RGBA grid to black and white with one kernel.

    Args:
        pixels: uint8 RGBA array. Not modified.
        kernel: diffusion kernel to apply.

    Returns:
        DitherResult labelled with the kernel's label.
    """
    buffer = ErrorBuffer.from_pixels(pixels)
    return DitherResult(label=kernel.label, pixels=dither_buffer(buffer, kernel))


def dither_all(
    pixels: np.ndarray,
    kernels: tuple[Kernel, ...] = KERNELS,
) -> list[DitherResult]:
    """Dither with each kernel, each pass on its own fresh buffer."""
    return [dither(pixels, kernel) for kernel in kernels]
