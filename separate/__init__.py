"""Label and separate the isolated white shapes of a two-tone image."""
from .config import RenderConfig
from .errors import (ConfigurationError, ContentWarning, InputError, OutputError,
                     SeparateError, ShapeOverflowError)
from .labeler import LabelResult, Region, describe_regions, grid_points, label_shapes
from .pipeline import process_image
from .ramp import build_ramp, spread
from .renderer import Artifact, Canvas, render

__version__ = "1.0.0"

__all__ = [
    "Artifact",
    "Canvas",
    "ConfigurationError",
    "ContentWarning",
    "InputError",
    "LabelResult",
    "OutputError",
    "Region",
    "RenderConfig",
    "SeparateError",
    "ShapeOverflowError",
    "build_ramp",
    "describe_regions",
    "grid_points",
    "label_shapes",
    "process_image",
    "render",
    "spread",
]
