"""Relative luminance of RGBA pixels."""

from __future__ import annotations

from typing import Sequence

import numpy as np

RED_WEIGHT = 0.2126
GREEN_WEIGHT = 0.7152
BLUE_WEIGHT = 0.0722


def luminosity(pixel: Sequence[int]) -> float:
    """Relative luminance of one (r, g, b, a) pixel, in [0, 255].

    Alpha is ignored.
    """
    r, g, b = pixel[0], pixel[1], pixel[2]
    return RED_WEIGHT * float(r) + GREEN_WEIGHT * float(g) + BLUE_WEIGHT * float(b)


def luminance_map(pixels: np.ndarray) -> np.ndarray:
    """Vectorized luminosity over an (H, W, 3|4) pixel grid.

    Returns:
        float32 array of shape (H, W) with values in [0, 255].
    """
    if pixels.ndim != 3 or pixels.shape[2] < 3:
        raise ValueError("pixels must have shape (H, W, 3) or (H, W, 4)")
    rgb = pixels[..., :3].astype(np.float32)
    return (
        np.float32(RED_WEIGHT) * rgb[..., 0]
        + np.float32(GREEN_WEIGHT) * rgb[..., 1]
        + np.float32(BLUE_WEIGHT) * rgb[..., 2]
    )
