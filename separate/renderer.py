from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import cv2 as cv
import numpy as np

from .config import TRIM_BORDER, RenderConfig
from .ramp import RAMP, apply_ramp, spread


class Canvas(NamedTuple):
    """Where an image sits on the original frame (page geometry)."""
    width: int
    height: int
    x: int
    y: int

    @property
    def geometry(self) -> str:
        return f"{self.width}x{self.height}{self.x:+d}{self.y:+d}"


@dataclass(frozen=True)
class Artifact:
    image: np.ndarray           # grey (H,W), RGB (H,W,3) or RGBA (H,W,4)
    label: Optional[int]        # None for the combined modes 1-3
    canvas: Canvas
    trimmed: bool = False


# ---------- Derived constants ----------

def scale_factor(count: int) -> float:
    """Multiplier taking label `count` to 255."""
    return 255.0 / count if count > 0 else 0.0


def black_threshold(count: int) -> float:
    """Half a label step, in percent; stretched levels at or below it become black."""
    return 0.5 * 100.0 / count if count > 0 else 100.0


def _threshold_level(count: int) -> float:
    return black_threshold(count) * 255.0 / 100.0


def stretch(labels: np.ndarray, count: int) -> np.ndarray:
    """Label index -> 0..255, with the near-zero floor snapped to black."""
    if count <= 0:
        return np.zeros_like(labels, dtype=np.uint8)
    levels = np.clip(np.rint(labels.astype(np.float64) * scale_factor(count)), 0, 255)
    levels[levels <= _threshold_level(count)] = 0
    return levels.astype(np.uint8)


def label_level(label: int, count: int) -> int:
    return int(np.clip(np.rint(label * scale_factor(count)), 0, 255))


# ---------- Combined modes 1-3 ----------

def _render_combined(labels: np.ndarray, count: int, config: RenderConfig) -> np.ndarray:
    if config.mode == 1:
        return labels.astype(np.uint8, copy=True)
    levels = stretch(labels, count)
    if config.mode == 2:
        return levels
    colour = apply_ramp(spread(levels, config.exponent), RAMP)
    colour[levels == 0] = 0
    return colour


# ---------- Per-label modes 4-6 ----------

def isolate(labels: np.ndarray, label: int, count: int, config: RenderConfig) -> np.ndarray:
    """
    Image of one label on the chosen background. Label 0 is the background mask
    itself: white wherever no shape was found.
    """
    content = labels == label
    h, w = labels.shape

    if label == 0 or config.mode == 5:
        value = 255
    else:
        value = label_level(label, count)

    if label != 0 and config.mode == 6:
        level = spread(np.array([value], np.uint8), config.exponent)
        rgb = RAMP[level[0]]
        img = np.zeros((h, w, 3), np.uint8)
        img[content] = rgb
    else:
        img = np.zeros((h, w), np.uint8)
        img[content] = value

    if config.transparent:
        if img.ndim == 2:
            img = cv.cvtColor(img, cv.COLOR_GRAY2RGB)
        alpha = content.astype(np.uint8) * 255
        img = np.dstack([img, alpha])
    return img


def trim(img: np.ndarray, content: np.ndarray, border: int = TRIM_BORDER) -> Optional[Artifact]:
    """
    Crop to the content's bounding box plus `border` px of background (black or
    fully transparent). Returns None when there is nothing to crop to.
    """
    x, y, bw, bh = cv.boundingRect(content.astype(np.uint8))
    if bw == 0 or bh == 0:
        return None
    crop = np.ascontiguousarray(img[y:y+bh, x:x+bw])
    value = (0,) * (img.shape[2] if img.ndim == 3 else 1)
    padded = cv.copyMakeBorder(crop, border, border, border, border, cv.BORDER_CONSTANT, value=value)
    canvas = Canvas(bw + 2 * border, bh + 2 * border, x - border, y - border)
    return Artifact(padded, None, canvas, trimmed=True)


def _render_label(labels: np.ndarray, label: int, count: int, config: RenderConfig) -> Artifact:
    h, w = labels.shape
    img = isolate(labels, label, count, config)
    # the background mask stays full frame; only shapes are trimmed
    if config.trim and label != 0:
        cropped = trim(img, labels == label)
        if cropped is not None:
            return Artifact(cropped.image, label, cropped.canvas, trimmed=True)
    return Artifact(img, label, Canvas(w, h, 0, 0))


# ---------- Public entry point ----------

def render(labels: np.ndarray, count: int, config: RenderConfig) -> List[Artifact]:
    """
    Modes 1-3 give one artifact for the whole frame; modes 4-6 give count+1,
    label 0 (background) first. With trim on, label 0 stays the full-frame
    negated mask at offset +0+0; shapes 1..count are cropped.
    """
    h, w = labels.shape
    if not config.per_label:
        return [Artifact(_render_combined(labels, count, config), None, Canvas(w, h, 0, 0))]
    # each label reads `labels` only, so order does not affect the images
    return [_render_label(labels, i, count, config) for i in range(count + 1)]
