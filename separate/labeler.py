from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional, Tuple

import cv2 as cv
import numpy as np

from .config import MAX_LABEL
from .errors import ConfigurationError, ShapeOverflowError
from .raster import BLACK, WHITE, check_binary


class LabelResult(NamedTuple):
    labels: np.ndarray               # uint8 (H, W); 0 background, 1..count shapes
    count: int
    seeds: List[Tuple[int, int]]     # (x, y) that started each shape, in label order


class Region(NamedTuple):
    id: int
    bbox: Dict[str, int]
    area: int
    centroid: Dict[str, float]


# ---------- Flood fill ----------

def _flood(search: np.ndarray, padded: np.ndarray, seed: Tuple[int, int],
           label: int, connectivity: int) -> int:
    """
    Fill the shape under `seed` to black in `search` and stamp `label` into
    `padded` (the (h+2, w+2) flood-fill mask whose interior is the label raster).
    Returns the number of pixels filled.
    """
    # Flags = connectivity | (newMaskVal<<8); equal intensities connect, any change stops
    flags = connectivity | (label << 8)
    area, _img, _mask, _rect = cv.floodFill(search, padded, seed, BLACK, 0, 0, flags)
    return int(area)


def _next_label(count: int) -> int:
    label = count + 1
    if label > MAX_LABEL:
        raise ShapeOverflowError(f"too many shapes: more than {MAX_LABEL} found")
    return label


# ---------- Seed discovery ----------

def grid_points(shape_hw: Tuple[int, int], grid: int) -> List[Tuple[int, int]]:
    """
    Sample points (x, y) spaced `grid` percent of the width / height apart,
    row-major. The first row and column sit one step in from the edge.
    """
    if not 1 <= grid <= 99:
        raise ConfigurationError(f"grid must be 1-99 percent, got {grid}")
    h, w = shape_hw
    xinc = max(1, (grid * w) // 100)
    yinc = max(1, (grid * h) // 100)
    return [(x, y) for y in range(yinc, h, yinc) for x in range(xinc, w, xinc)]


def _scan_exhaustive(search: np.ndarray, padded: np.ndarray, connectivity: int) -> List[Tuple[int, int]]:
    h, w = search.shape
    flat = search.reshape(-1)   # view: fills are visible here
    seeds: List[Tuple[int, int]] = []
    start = 0
    while True:
        hits = np.flatnonzero(flat[start:] == WHITE)
        if hits.size == 0:
            break
        idx = start + int(hits[0])
        seed = (idx % w, idx // w)
        label = _next_label(len(seeds))
        _flood(search, padded, seed, label, connectivity)
        seeds.append(seed)
        # everything before idx was already non-white and fills only clear pixels
        start = idx + 1
    return seeds


def _scan_grid(search: np.ndarray, padded: np.ndarray, grid: int, connectivity: int) -> List[Tuple[int, int]]:
    seeds: List[Tuple[int, int]] = []
    for x, y in grid_points(search.shape, grid):
        if search[y, x] != WHITE:
            continue
        label = _next_label(len(seeds))
        _flood(search, padded, (x, y), label, connectivity)
        seeds.append((x, y))
    return seeds


# ---------- Public entry point ----------

def label_shapes(raster: np.ndarray, grid: Optional[int] = None,
                 connectivity: int = 4) -> LabelResult:
    """
    Give every isolated white shape its own label, in discovery order.

    grid=None searches the whole image for the next white pixel after each fill
    (exact, slower). grid=1..99 only checks a lattice of sample points, which is
    faster but misses shapes that no sample point lands on.
    """
    if raster.ndim != 2:
        raise ConfigurationError(f"expected a single channel raster, got shape {raster.shape}")
    if connectivity not in (4, 8):
        raise ConfigurationError(f"connectivity must be 4 or 8, got {connectivity}")
    check_binary(raster)

    h, w = raster.shape
    search = np.ascontiguousarray(raster, dtype=np.uint8).copy()
    padded = np.zeros((h + 2, w + 2), np.uint8)

    if grid is None:
        seeds = _scan_exhaustive(search, padded, connectivity)
    else:
        seeds = _scan_grid(search, padded, grid, connectivity)

    labels = padded[1:h+1, 1:w+1].copy()
    return LabelResult(labels, len(seeds), seeds)


def describe_regions(labels: np.ndarray, count: int) -> List[Region]:
    """Bounding box, area and centroid of each label 1..count."""
    regions: List[Region] = []
    for j in range(1, count + 1):
        m = (labels == j).astype(np.uint8)
        ys, xs = np.where(m > 0)
        if xs.size > 0:
            x0, x1 = int(xs.min()), int(xs.max())
            y0, y1 = int(ys.min()), int(ys.max())
            bbox = {"x": x0, "y": y0, "width": x1 - x0 + 1, "height": y1 - y0 + 1}
        else:
            bbox = {"x": 0, "y": 0, "width": 0, "height": 0}
        M = cv.moments(m, binaryImage=True)
        cx = float(M["m10"] / (M["m00"] + 1e-9))
        cy = float(M["m01"] / (M["m00"] + 1e-9))
        regions.append(Region(j, bbox, int(xs.size), {"x": cx, "y": cy}))
    return regions
