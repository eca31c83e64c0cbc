from __future__ import annotations


class SeparateError(Exception):
    """Base class for everything the shape separator raises on purpose."""


class ConfigurationError(SeparateError, ValueError):
    pass


class InputError(SeparateError, FileNotFoundError):
    pass


class ShapeOverflowError(SeparateError, OverflowError):
    pass


class OutputError(SeparateError, OSError):
    pass


class ContentWarning(UserWarning):
    """Binarized input does not hold exactly two intensities."""
