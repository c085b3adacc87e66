# errors.py
"""
Exception types raised while decoding and converting ARGO files.

All of them abort the conversion of the current file only; the batch
pipeline reports the message and moves on to the next file.
"""
from __future__ import annotations


class ArgoError(Exception):
    """Base class for per-file conversion failures."""


class FormatError(ArgoError, ValueError):
    """Malformed header, non-numeric token or impossible count."""


class UnexpectedEndOfStream(ArgoError, EOFError):
    """The token stream ran out where more fields were expected."""

    def __init__(self, position: int, what: str = "token"):
        super().__init__(f"Unexpected end of data at token {position} (expected {what})")
        self.position = position


class DegenerateGeometryError(ArgoError, ValueError):
    """A contour has fewer than three distinct points."""
