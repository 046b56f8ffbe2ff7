"""Exceptions and warnings raised during conversion."""

from __future__ import annotations


class ConversionError(Exception):
    """Custom exception for conversion errors."""


class PaletteOverflowError(ConversionError):
    """Raised in strict mode when a tile holds more than four colors."""


class PaletteOverflowWarning(RuntimeWarning):
    """Issued when a tile holds more than four colors and the extras fall back."""
