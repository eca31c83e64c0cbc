import cv2 as cv
import numpy as np
import pytest


@pytest.fixture
def two_squares():
    """100x100 black frame with 10x10 white squares at (10,10) and (80,80)."""
    img = np.zeros((100, 100), np.uint8)
    img[10:20, 10:20] = 255
    img[80:90, 80:90] = 255
    return img


@pytest.fixture
def two_squares_png(tmp_path, two_squares):
    p = tmp_path / "shapes.png"
    cv.imwrite(str(p), two_squares)
    return p


@pytest.fixture
def dotted():
    def make(n_side: int, step: int = 2) -> np.ndarray:
        """n_side * n_side single white pixels, none touching (not even diagonally)."""
        img = np.zeros((n_side * step, n_side * step), np.uint8)
        img[::step, ::step] = 255
        return img
    return make
