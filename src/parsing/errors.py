"""Errors raised while turning uploaded files into text."""


class ExtractionError(Exception):
    """Raised when no text can be extracted from an uploaded file."""
