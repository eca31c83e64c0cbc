import numpy as np
import pytest

from separate.ramp import RAMP, STOPS, apply_ramp, build_ramp, spread


def test_ramp_shape_and_endpoints():
    assert RAMP.shape == (256, 3)
    assert RAMP.dtype == np.uint8
    assert tuple(RAMP[0]) == (0, 0, 0)
    assert tuple(RAMP[255]) == STOPS[-1]


def test_ramp_starts_dark_and_warms_up():
    # first stops are black -> red
    assert RAMP[40, 0] > RAMP[5, 0]


def test_custom_ramp():
    ramp = build_ramp([(0, 0, 0), (255, 255, 255)], size=16)
    assert ramp.shape == (16, 3)
    assert tuple(ramp[0]) == (0, 0, 0)
    assert tuple(ramp[-1]) == (255, 255, 255)
    assert (np.diff(ramp[:, 0].astype(int)) >= 0).all()


def test_ramp_needs_two_stops():
    with pytest.raises(ValueError):
        build_ramp([(0, 0, 0)])


def test_spread_identity_at_one():
    levels = np.arange(256, dtype=np.uint8)
    assert np.array_equal(spread(levels, 1), levels)


@pytest.mark.parametrize("exponent", [2, 6, 10])
def test_spread_pushes_away_from_black(exponent):
    levels = np.arange(256, dtype=np.uint8)
    out = spread(levels, exponent)
    assert out[0] == 0
    assert out[255] == 255
    assert (out[1:255] >= levels[1:255]).all()
    assert (np.diff(out.astype(int)) >= 0).all()
    assert out[10] > 10


def test_apply_ramp_lookup():
    levels = np.array([[0, 255]], np.uint8)
    rgb = apply_ramp(levels)
    assert rgb.shape == (1, 2, 3)
    assert tuple(rgb[0, 1]) == STOPS[-1]
