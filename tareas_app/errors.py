"""
Error types raised by the tareas API client.

Every failure the client can produce is an :class:`ApiError`, so screens
can catch a single type and show ``str(error)`` to the user.  The
subclasses tell the failure modes apart:

    - ``ValidationError`` -- bad input caught locally, before any request.
    - ``TransportError``  -- the server could not be reached at all.
    - ``ProtocolError``   -- the server answered with a non-success status.
    - ``SemanticError``   -- a success status whose payload breaks the
      operation's contract (e.g. a login response without a token).
    - ``ParseError``      -- a body or token that could not be decoded.
"""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """
    Base class for all client errors.

    Attributes:
        message: Human-readable description, suitable for display as-is.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(ApiError):
    """Input rejected locally; no request was sent."""


class TransportError(ApiError):
    """The request never produced an HTTP response."""


class ProtocolError(ApiError):
    """
    The server answered with a non-success HTTP status.

    Attributes:
        status_code: The HTTP status code of the response.
        payload: The parsed response body, or ``None`` when it was empty.
    """

    def __init__(self, message: str, status_code: int, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class SemanticError(ApiError):
    """The server reported success but the payload is unusable."""


class ParseError(ApiError):
    """A response body or stored token is not valid structured data."""
