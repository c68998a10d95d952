"""Exceptions raised by the autotile engine.

Everything derives from ``ValueError`` so command-line callers can report
them alongside ordinary bad-input errors.
"""

from __future__ import annotations


class AutotileError(ValueError):
    """Base class for all autotile errors."""


class InvalidSchemeError(AutotileError):
    """Scheme value is neither Basic4 (16) nor Blob8 (47)."""


class InvalidTileSizeError(AutotileError):
    """Tile size is not a positive integer."""


class MissingAllSourcesError(AutotileError):
    """None of the five source roles was supplied."""


class MalformedAssetError(AutotileError):
    """A raster is not usable (wrong type, zero size, or wrong dimensions)."""
