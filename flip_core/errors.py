from __future__ import annotations


class FlipError(Exception):
    """Base class for errors raised by the Flip core."""


class ConfigurationError(FlipError, ValueError):
    """Raised when a board cannot be built for the requested grid size."""


class InvalidArgument(FlipError, ValueError):
    """Raised when a caller passes a tile index outside the board."""
