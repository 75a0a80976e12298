"""
HTTP client for the tareas REST API.

Centralises everything the screens need to talk to the server: building
request headers from the stored credential, issuing one request per
operation, and turning each HTTP response into either a payload or a typed
:class:`~tareas_app.errors.ApiError`.  The module is organised into three
sections:

1. **Validation helpers** -- local checks that run before any request.
2. **Response handling** -- ``handle_response`` normalises every reply.
3. **API client** -- ``ApiClient`` exposes the auth, token and task
   operations.

No operation retries, refreshes tokens, or schedules background work.  A
failure is raised to the caller, who decides whether to try again.
"""

from __future__ import annotations

import json
import logging
import re
import time
from http import HTTPStatus
from typing import Any

import jwt
import requests

from .errors import (
    ParseError,
    ProtocolError,
    SemanticError,
    TransportError,
    ValidationError,
)
from .models import DecodedToken, Tarea, TareaFields
from .storage import CredentialStore

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


# =====================================================================
# Validation Helpers
# =====================================================================


def is_valid_email(email: str) -> bool:
    """Return True when *email* looks like ``local@domain.tld``."""
    return EMAIL_PATTERN.fullmatch(email) is not None


# =====================================================================
# Response Handling
# =====================================================================


def _status_phrase(response: requests.Response) -> str:
    """Return the status line reason, falling back to the standard phrase."""
    if response.reason:
        return response.reason
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return f"HTTP {response.status_code}"


def _error_message(response: requests.Response, payload: Any) -> str:
    """
    Pick the message for a failed response.

    Looks at the payload's ``error`` field, then its ``message`` field, and
    only falls back to the HTTP status phrase when neither holds a
    non-blank string.

    Args:
        response: The failed :class:`requests.Response`.
        payload: The already-parsed body (``None`` when it was empty).

    Returns:
        A human-readable error message.
    """
    if isinstance(payload, dict):
        for field in ("error", "message"):
            message = payload.get(field)
            if isinstance(message, str) and message.strip():
                return message
    return _status_phrase(response)


def handle_response(response: requests.Response) -> Any:
    """
    Normalise an API response into its payload or raise an ``ApiError``.

    The body is always read as text first.  An empty body yields ``None``
    rather than an error; anything else must be valid JSON.  The status is
    only checked once the body has been parsed, so a failed response can
    contribute its own error message.

    Args:
        response: The :class:`requests.Response` returned by the server.

    Returns:
        The parsed JSON payload, or ``None`` for an empty body.  No shape
        validation is performed; callers check what they rely on.

    Raises:
        ParseError: If the body is non-empty and not valid JSON.
        ProtocolError: If the status code is outside the 2xx range.
    """
    text = response.text
    payload = None
    if text:
        try:
            payload = json.loads(text)
        except ValueError as exc:
            raise ParseError(
                f"Malformed response from server (HTTP {response.status_code})"
            ) from exc

    if not 200 <= response.status_code < 300:
        message = _error_message(response, payload)
        logger.warning(
            "API request failed with HTTP %s: %s", response.status_code, message
        )
        raise ProtocolError(message, status_code=response.status_code, payload=payload)

    return payload


# =====================================================================
# API Client
# =====================================================================


class ApiClient:
    """
    Typed operations over the tareas REST API.

    Attributes:
        base_url: Root URL of the API (e.g. ``"https://host/api"``).
        store: Credential store holding the bearer token.  Read before every
            authenticated request and written on login.
        session: :class:`requests.Session` used for every request.
        timeout: Transport timeout in seconds forwarded to ``requests``;
            ``None`` waits as long as the transport allows.
    """

    def __init__(
        self,
        base_url: str,
        store: CredentialStore,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url
        self.store = store
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def build_headers(self, authenticated: bool = True) -> dict[str, str]:
        """
        Build the headers for one request.

        The JSON content type is always present.  The ``Authorization``
        header is added only when *authenticated* is set and a token is
        currently stored; it is never sent empty.

        Args:
            authenticated: Whether to attach the stored bearer token.

        Returns:
            A fresh header dictionary.
        """
        headers = {"Content-Type": "application/json"}
        if authenticated:
            token = self.store.get()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        authenticated: bool = True,
        body: Any = None,
    ) -> requests.Response:
        headers = self.build_headers(authenticated=authenticated)
        logger.debug(
            "%s %s (authenticated=%s)", method, path, "Authorization" in headers
        )
        try:
            return self.session.request(
                method=method,
                url=self._url(path),
                headers=headers,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed before a response arrived: %s", method, path, exc)
            raise TransportError(
                "Could not reach the server. Check your connection and try again."
            ) from exc

    def _send(self, method: str, path: str, **kwargs) -> Any:
        return handle_response(self._request(method, path, **kwargs))

    # -----------------------------------------------------------------
    # Authentication
    # -----------------------------------------------------------------

    def register(self, email: str, password: str) -> None:
        """
        Create an account for *email*.

        The email syntax is checked locally first; an invalid address is
        rejected without contacting the server.

        Raises:
            ValidationError: If *email* is not a valid address.
            ApiError: Any error raised while sending or handling the request.
        """
        if not is_valid_email(email):
            raise ValidationError("The email format is not valid")
        self._send(
            "POST",
            "/auth/register",
            authenticated=False,
            body={"username": email, "password": password},
        )

    def login(self, email: str, password: str) -> str:
        """
        Log in and persist the returned bearer token.

        A success status is not enough: the payload must carry a non-empty
        ``token``, otherwise the login is treated as failed and the stored
        credential is left as it was.

        Returns:
            The token that was stored.

        Raises:
            SemanticError: If the response has no usable token.
            ApiError: Any error raised while sending or handling the request.
        """
        payload = self._send(
            "POST",
            "/auth/login",
            authenticated=False,
            body={"username": email, "password": password},
        )
        token = payload.get("token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise SemanticError("No token received from server")

        self.store.set(token)
        logger.info("Login succeeded; credential stored")
        return token

    def logout(self) -> None:
        """Forget the stored credential.  Nothing is sent to the server."""
        self.store.clear()

    def decode_token(self) -> DecodedToken | None:
        """
        Read the claims of the stored token without verifying it.

        The signature is deliberately not checked: the claims are only used
        for local display decisions and must not be trusted for anything
        else.

        Returns:
            The decoded claims, or ``None`` when no token is stored.

        Raises:
            ParseError: If the stored token is not a decodable JWT.
        """
        token = self.store.get()
        if not token:
            return None
        try:
            claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError as exc:
            raise ParseError("Stored token could not be decoded") from exc
        return DecodedToken.from_claims(claims)

    def is_token_expired(self, now: float | None = None) -> bool:
        """
        Tell whether the stored session is over.

        Args:
            now: Current time as epoch seconds; defaults to ``time.time()``.

        Returns:
            True when no token is stored, the token cannot be decoded, it
            carries no ``exp`` claim, or ``exp`` is at or before *now*.
        """
        try:
            decoded = self.decode_token()
        except ParseError:
            logger.warning("Stored credential is not a decodable token")
            return True
        if decoded is None or decoded.exp is None:
            return True
        current = time.time() if now is None else now
        return decoded.exp <= current

    # -----------------------------------------------------------------
    # Tareas
    # -----------------------------------------------------------------

    def get_tareas(self) -> list[Tarea]:
        """Fetch every task visible to the current user."""
        return self._send("GET", "/tareas")

    def get_tarea(self, tarea_id: int) -> Tarea:
        """
        Fetch a single task by id.

        Args:
            tarea_id: Server-assigned identifier of the task.

        Returns:
            The task payload as returned by the server.
        """
        return self._send("GET", f"/tareas/{tarea_id}")

    def create_tarea(self, fields: TareaFields) -> Tarea:
        """
        Create a task.  The server assigns the ``id``; one passed in
        *fields* is dropped.
        """
        body = {name: value for name, value in fields.items() if name != "id"}
        return self._send("POST", "/tareas", body=body)

    def update_tarea(self, tarea_id: int, fields: TareaFields) -> Tarea:
        """Send a partial update and return the task as the server now has it."""
        return self._send("PUT", f"/tareas/{tarea_id}", body=dict(fields))

    def delete_tarea(self, tarea_id: int) -> None:
        """
        Delete a task.  The server's reply body, if any, is discarded.

        Args:
            tarea_id: Server-assigned identifier of the task.
        """
        self._send("DELETE", f"/tareas/{tarea_id}")
