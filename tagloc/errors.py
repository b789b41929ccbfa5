"""
Exception classes for the localization pipeline.

Kept in one module so models, providers and the web layer can share them
without circular imports.
"""

from typing import Optional


class TaglocError(Exception):
    """Base error with optional code and details."""

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class InputValidationError(TaglocError):
    """Caller input rejected before any work starts (no text, no language)."""


class ProviderError(TaglocError):
    """A translation backend could not produce a valid ordered result."""

    def __init__(self, message: str, provider: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.provider = provider


class ExportError(TaglocError):
    """Generating a report or archive failed."""
