import cv2 as cv
import numpy as np
import pytest

from separate.errors import ContentWarning, InputError
from separate.raster import (auto_contrast, binarize, check_binary, load_binary,
                             read_image, to_gray)


def test_load_binary_stretches_low_contrast(tmp_path):
    img = np.full((20, 20), 30, np.uint8)
    img[5:10, 5:10] = 90
    p = tmp_path / "dim.png"
    cv.imwrite(str(p), img)

    raster = load_binary(p)
    assert set(np.unique(raster)) == {0, 255}
    assert (raster[5:10, 5:10] == 255).all()
    assert raster[0, 0] == 0


def test_load_binary_negate(two_squares_png):
    raster = load_binary(two_squares_png, negate=True)
    assert raster[15, 15] == 0
    assert raster[50, 50] == 255


def test_colour_input_is_greyed(tmp_path):
    img = np.zeros((10, 10, 3), np.uint8)
    img[2:4, 2:4] = (0, 0, 255)     # red in BGR
    p = tmp_path / "colour.png"
    cv.imwrite(str(p), img)

    raster = load_binary(p)
    assert raster.ndim == 2
    assert (raster[2:4, 2:4] == 255).all()


def test_alpha_is_flattened_onto_black(tmp_path):
    img = np.full((10, 10, 4), 255, np.uint8)
    img[:, :5, 3] = 0               # left half fully transparent
    p = tmp_path / "alpha.png"
    cv.imwrite(str(p), img)

    decoded = read_image(p)
    assert decoded.shape == (10, 10, 3)
    assert not decoded[:, :5].any()
    assert (decoded[:, 5:] == 255).all()


def test_sixteen_bit_input(tmp_path):
    img = np.zeros((8, 8), np.uint16)
    img[2:6, 2:6] = 65535
    p = tmp_path / "deep.png"
    cv.imwrite(str(p), img)

    raster = load_binary(p)
    assert raster.dtype == np.uint8
    assert (raster[2:6, 2:6] == 255).all()


def test_missing_file(tmp_path):
    with pytest.raises(InputError, match="Could not read image"):
        read_image(tmp_path / "nope.png")


def test_not_an_image(tmp_path):
    p = tmp_path / "fake.png"
    p.write_text("definitely not a png")
    with pytest.raises(FileNotFoundError):
        load_binary(p)


def test_binarize_splits_at_half():
    gray = np.array([[0, 127, 128, 255]], np.uint8)
    assert binarize(gray).tolist() == [[0, 0, 255, 255]]


def test_auto_contrast_leaves_flat_image():
    gray = np.full((3, 3), 200, np.uint8)
    assert np.array_equal(auto_contrast(gray), gray)


def test_to_gray_passthrough():
    gray = np.zeros((3, 3), np.uint8)
    assert to_gray(gray) is gray


def test_check_binary():
    assert check_binary(np.array([[0, 255]], np.uint8)) == 2
    with pytest.warns(ContentWarning, match="1 distinct intensity"):
        assert check_binary(np.zeros((2, 2), np.uint8)) == 1
