from __future__ import annotations

import warnings
from pathlib import Path
from typing import Union

import cv2 as cv
import numpy as np

from .errors import ContentWarning, InputError

BLACK = 0
WHITE = 255


def read_image(path: Union[str, Path]) -> np.ndarray:
    """Decode any format OpenCV understands; alpha is flattened onto black."""
    img = cv.imread(str(path), cv.IMREAD_UNCHANGED)
    if img is None:
        raise InputError(f"Could not read image: {path}")
    if img.size == 0:
        raise InputError(f"Image has no pixels: {path}")

    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    elif img.dtype != np.uint8:
        raise InputError(f"Unsupported pixel type {img.dtype} in {path}")

    if img.ndim == 3 and img.shape[2] == 4:
        alpha = img[:, :, 3:4].astype(np.float32) / 255.0
        img = np.rint(img[:, :, :3].astype(np.float32) * alpha).astype(np.uint8)
    return img


def to_gray(img: np.ndarray) -> np.ndarray:
    if img.ndim == 2:
        return img
    if img.shape[2] == 1:
        return img[:, :, 0]
    if img.shape[2] == 4:
        return cv.cvtColor(img, cv.COLOR_BGRA2GRAY)
    return cv.cvtColor(img, cv.COLOR_BGR2GRAY)


def auto_contrast(gray: np.ndarray) -> np.ndarray:
    """Min-max stretch to 0..255. A flat image is returned unchanged."""
    lo, hi = int(gray.min()), int(gray.max())
    if lo == hi:
        return gray.copy()
    return cv.normalize(gray, None, 0, 255, cv.NORM_MINMAX)


def binarize(gray: np.ndarray, threshold: float = 50.0) -> np.ndarray:
    """Threshold at `threshold` percent of full scale -> uint8 {0,255}."""
    _, th = cv.threshold(gray, threshold * 255.0 / 100.0, WHITE, cv.THRESH_BINARY)
    return th


def check_binary(raster: np.ndarray) -> int:
    """Warn (do not fail) unless the raster holds exactly two intensities."""
    n = int(np.unique(raster).size)
    if n != 2:
        warnings.warn(
            f"input is not binary: found {n} distinct intensit{'y' if n == 1 else 'ies'}, expected 2",
            ContentWarning,
            stacklevel=2,
        )
    return n


def load_binary(path: Union[str, Path], *, negate: bool = False) -> np.ndarray:
    """Run: decode -> grey -> auto-contrast -> binarize (-> negate)."""
    gray = to_gray(read_image(path))
    raster = binarize(auto_contrast(gray))
    if negate:
        raster = cv.bitwise_not(raster)
    return raster
