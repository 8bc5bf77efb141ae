"""Mutable error-accumulation buffer for error diffusion.

The buffer is x-major: cell ``[x, y]`` belongs to column ``x``, row ``y``.
Writes that land outside the grid are dropped, so pixels on the image border
receive less error correction than interior ones.
"""

from __future__ import annotations

import numpy as np

from bw_dither.core.luminance import luminance_map


class ErrorBuffer:
    """W x H grid of float32 brightness plus accumulated quantization error."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("width and height must be non-negative")
        self._cells = np.zeros((width, height), dtype=np.float32)

    @classmethod
    def from_pixels(cls, pixels: np.ndarray) -> ErrorBuffer:
        """Build a buffer from an (H, W, 4) RGBA grid, normalized to [0, 1]."""
        normalized = luminance_map(pixels) / np.float32(255.0)
        return cls.from_values(normalized.T)

    @classmethod
    def from_values(cls, values: np.ndarray) -> ErrorBuffer:
        """Wrap a copy of an x-major (W, H) array of brightness values."""
        arr = np.asarray(values, dtype=np.float32)
        if arr.ndim != 2:
            raise ValueError("values must be a 2D (W, H) array")
        buf = cls(*arr.shape)
        buf._cells[...] = arr
        return buf

    @property
    def width(self) -> int:
        return self._cells.shape[0]

    @property
    def height(self) -> int:
        return self._cells.shape[1]

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the cells, shape (W, H)."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> float:
        return float(self._cells[x, y])

    def add(self, x: int, y: int, offset_x: int, offset_y: int, amount: float) -> None:
        """Add ``amount`` to the cell at (x + offset_x, y + offset_y).

        Targets outside the grid are ignored.
        """
        tx, ty = x + offset_x, y + offset_y
        if not self.contains(tx, ty):
            return
        self._cells[tx, ty] += np.float32(amount)
