"""
Exceptions raised while configuring mock responses.
"""

from __future__ import annotations

__all__ = ["InvalidStateError", "MockResponseError", "ResponseParseError"]


class MockResponseError(Exception):
    """Base class for all servicemock errors."""


class InvalidStateError(MockResponseError, ValueError):
    """
    Raised when a fluent setter receives a value outside its valid range.

    The response keeps its previous value for the rejected field.
    """


class ResponseParseError(MockResponseError, RuntimeError):
    """
    Raised when a response definition cannot be turned into a mock response.

    The underlying failure is chained as ``__cause__``.
    """

    default_message = "Failed to parse endpoint response"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
