from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

MODES = (1, 2, 3, 4, 5, 6)
PER_LABEL_MODES = (4, 5, 6)
BACKGROUNDS = ("black", "transparent")
CONNECTIVITIES = (4, 8)

MAX_LABEL = 255     # labels live in a uint8 raster
TRIM_BORDER = 5     # px of background kept around a trimmed shape


@dataclass(frozen=True)
class RenderConfig:
    """
    Everything the labeler and renderer need, resolved once from the command line.

      mode          1 grey index map, 2 stretched map, 3 colour map,
                    4 stretched shapes, 5 binary shapes, 6 coloured shapes
      background    "black" (opaque) or "transparent" (alpha) for per-shape images
      exponent      spread applied before the colour ramp lookup (1 = none)
      trim          crop per-shape images to their bounding box (modes 4-6)
      keep_canvas   remember where each trimmed image sat in the original frame
      list_canvas   print WIDTHxHEIGHT+X+Y for every trimmed image
      grid          sample spacing in percent; None scans the whole image
      connectivity  4 or 8 neighbour flood fill
    """
    mode: int = 3
    background: str = "black"
    exponent: int = 1
    trim: bool = False
    keep_canvas: bool = False
    list_canvas: bool = False
    grid: Optional[int] = None
    connectivity: int = 4

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ConfigurationError(f"mode must be an integer 1-6, got {self.mode!r}")
        if self.grid is not None and not (isinstance(self.grid, int) and 1 <= self.grid <= 99):
            raise ConfigurationError(f"grid must be an integer 1-99 (percent), got {self.grid!r}")
        if isinstance(self.exponent, bool) or not isinstance(self.exponent, int) or self.exponent <= 0:
            raise ConfigurationError(f"exponent must be a positive integer, got {self.exponent!r}")
        if self.background not in BACKGROUNDS:
            raise ConfigurationError(
                f"background must be one of {BACKGROUNDS}, got {self.background!r}")
        if self.connectivity not in CONNECTIVITIES:
            raise ConfigurationError(f"connectivity must be 4 or 8, got {self.connectivity!r}")

    @property
    def per_label(self) -> bool:
        return self.mode in PER_LABEL_MODES

    @property
    def transparent(self) -> bool:
        return self.background == "transparent"
