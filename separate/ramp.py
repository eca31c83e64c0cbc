from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
from scipy.interpolate import CubicSpline

# black -> red -> orange -> yellow -> green -> cyan -> blue -> violet (RGB)
STOPS: List[Tuple[int, int, int]] = [
    (0, 0, 0),
    (255, 0, 0),
    (255, 165, 0),
    (255, 255, 0),
    (0, 128, 0),
    (0, 255, 255),
    (0, 0, 255),
    (238, 130, 238),
]


def build_ramp(stops: Sequence[Tuple[int, int, int]] = STOPS, size: int = 256) -> np.ndarray:
    """
    Spread the stops evenly over 0..size-1 and interpolate each channel with a
    cubic spline. Returns a (size, 3) uint8 RGB lookup table.
    """
    if len(stops) < 2:
        raise ValueError("a colour ramp needs at least two stops")
    pos = np.linspace(0.0, size - 1, len(stops))
    spline = CubicSpline(pos, np.asarray(stops, dtype=np.float64), axis=0, bc_type="natural")
    table = spline(np.arange(size, dtype=np.float64))
    return np.clip(np.rint(table), 0, 255).astype(np.uint8)


RAMP = build_ramp()


def spread(levels: np.ndarray, exponent: int) -> np.ndarray:
    """
    Gamma-style push away from black: level/255 -> (level/255) ** (1/exponent).
    exponent=1 is the identity; 0 and 255 are fixed points.
    """
    if exponent == 1:
        return levels.astype(np.uint8, copy=True)
    x = levels.astype(np.float64) / 255.0
    return np.clip(np.rint(255.0 * np.power(x, 1.0 / exponent)), 0, 255).astype(np.uint8)


def apply_ramp(levels: np.ndarray, ramp: np.ndarray = RAMP) -> np.ndarray:
    """Grey (H, W) uint8 -> RGB (H, W, 3) through the lookup table."""
    return ramp[levels.astype(np.uint8)]
