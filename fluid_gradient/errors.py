from __future__ import annotations


class FluidGradientError(Exception):
    """Base class for errors raised by the gradient engine."""


class InvalidRange(FluidGradientError, ValueError):
    """A random range was requested with `low > high` or non-finite bounds."""


class InvalidState(FluidGradientError, ValueError):
    """An interpolation was requested between values that cannot be animated."""
