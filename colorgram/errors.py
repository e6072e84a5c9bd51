# colorgram/errors.py
"""Exceptions raised by palette extraction."""


class ExtractError(Exception):
    """Raised when a palette cannot be extracted from the given source."""


class DecodeError(ExtractError):
    """Raised when the source cannot be decoded into an image."""


__all__ = ["ExtractError", "DecodeError"]
