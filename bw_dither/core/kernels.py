"""Error diffusion kernels.

Each kernel is a table of ``(dx, dy, weight)`` taps, ``dx`` along columns and
``dy`` along rows. Taps are applied in table order.

Atkinson::

          | PXL |
    | 1/8 | 2/8 | 1/8 |
          | 2/8 |

Two of the six Atkinson taps repeat (0, +1) and (0, +2) instead of reaching
(+1, 0) and (+2, 0); 6/8 of the error is distributed and the rest dropped.

Floyd-Steinberg::

           |  PXL | 7/16 |
    | 3/16 | 5/16 | 1/16 |
"""

from __future__ import annotations

from dataclasses import dataclass

from bw_dither.core.buffer import ErrorBuffer

THRESHOLD = 0.5
WHITE = 255
BLACK = 0


def quantize(value: float) -> float:
    """Round a brightness to 1.0 or 0.0. Exactly 0.5 becomes 0.0."""
    return 1.0 if value > THRESHOLD else 0.0


@dataclass(frozen=True)
class Kernel:
    """A named error diffusion pattern."""

    label: str  # used in output file names
    name: str
    taps: tuple[tuple[int, int, float], ...]

    @property
    def total_weight(self) -> float:
        return sum(weight for _, _, weight in self.taps)

    def diffuse(self, buffer: ErrorBuffer, x: int, y: int) -> float:
        """Quantize pixel (x, y) and push its error to the neighbors.

        Returns:
            The quantized value, 1.0 (white) or 0.0 (black).
        """
        old = buffer.get(x, y)
        new = quantize(old)
        error = old - new
        for dx, dy, weight in self.taps:
            buffer.add(x, y, dx, dy, error * weight)
        return new


ATKINSON = Kernel(
    label="atkinson",
    name="Atkinson",
    taps=(
        (-1, 1, 1 / 8),
        (0, 1, 1 / 8),
        (0, 2, 1 / 8),
        (1, 1, 1 / 8),
        (0, 1, 1 / 8),
        (0, 2, 1 / 8),
    ),
)

FLOYD_STEINBERG = Kernel(
    label="floyd",
    name="Floyd-Steinberg",
    taps=(
        (1, 0, 7 / 16),
        (-1, 1, 3 / 16),
        (0, 1, 5 / 16),
        (1, 1, 1 / 16),
    ),
)

KERNELS: tuple[Kernel, ...] = (ATKINSON, FLOYD_STEINBERG)


def to_pixel(value: float) -> int:
    """Map a quantized value to an 8-bit gray level."""
    return WHITE if value == 1.0 else BLACK
