"""Exceptions raised by the game core."""

from __future__ import annotations


class WeathrGuessrError(Exception):
    """Base class for game errors."""


class DataFetchError(WeathrGuessrError):
    """Required round data (the weather forecast) could not be loaded."""


class ImageFetchError(WeathrGuessrError):
    """City image lookup failed. Always handled by substituting a placeholder."""


class CatalogError(WeathrGuessrError, ValueError):
    """The city catalog file is missing or malformed."""
