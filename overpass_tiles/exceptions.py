"""
Exception classes for Overpass Tiles

Errors raised by boundary operations, the transport and the response parser.
Malformed individual elements in a response are never reported here, they
are skipped by the parser.
"""

from typing import Optional, Dict, Any


class OverpassError(Exception):
    """Base exception for all Overpass Tiles errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class NotSupportedError(OverpassError):
    """
    Raised when a boundary operation has no algorithm for the given shape.

    Currently raised by contains/touches on polygon boundaries.
    Not retryable.
    """
    pass


class TransportError(OverpassError):
    """
    Raised when the Overpass endpoint cannot be reached or answers with
    an HTTP error status.
    """
    pass


class ResponseError(OverpassError):
    """Raised when a response body is not a readable XML document."""
    pass
