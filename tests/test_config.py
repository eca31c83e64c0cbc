import pytest

from separate.config import RenderConfig
from separate.errors import ConfigurationError


def test_defaults():
    cfg = RenderConfig()
    assert cfg.mode == 3
    assert cfg.background == "black"
    assert cfg.exponent == 1
    assert cfg.grid is None
    assert cfg.connectivity == 4
    assert not cfg.trim and not cfg.keep_canvas and not cfg.list_canvas
    assert not cfg.per_label
    assert not cfg.transparent


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mode": 0},
        {"mode": 7},
        {"grid": 0},
        {"grid": 100},
        {"grid": 2.5},
        {"exponent": 0},
        {"exponent": -2},
        {"exponent": 1.5},
        {"exponent": True},
        {"background": "white"},
        {"connectivity": 6},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ConfigurationError):
        RenderConfig(**kwargs)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        RenderConfig(mode=9)


@pytest.mark.parametrize("mode,per_label", [(1, False), (3, False), (4, True), (6, True)])
def test_per_label(mode, per_label):
    assert RenderConfig(mode=mode).per_label is per_label


def test_is_frozen():
    cfg = RenderConfig()
    with pytest.raises(AttributeError):
        cfg.mode = 1
