"""Test doubles and token helpers shared by the client test suites."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from http import HTTPStatus
from typing import Any

import jwt

BASE_URL = "http://tareas-api.test/api"
TEST_TOKEN_SECRET = "tareas-test-secret"
DEFAULT_TEST_SUBJECT = "1"


class FakeResponse:
    """
    Minimal stand-in for :class:`requests.Response`.

    Provides just the interface ``handle_response`` reads: ``status_code``,
    ``reason`` and ``text``.  A *payload* is serialised to JSON; pass *text*
    instead to control the raw body.
    """

    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        *,
        text: str | None = None,
        reason: str | None = None,
    ):
        self.status_code = status_code
        if text is None:
            text = "" if payload is None else json.dumps(payload)
        self.text = text
        if reason is None:
            reason = HTTPStatus(status_code).phrase
        self.reason = reason


class RecordingSession:
    """
    Fake :class:`requests.Session` that records calls and replays replies.

    Each queued item is returned (or raised, if it is an exception) by one
    ``request`` call, in order.

    Attributes:
        calls: Keyword arguments of every ``request`` call received.
    """

    def __init__(self, *replies):
        self.calls: list[dict[str, Any]] = []
        self._replies = list(replies)

    def queue(self, *replies) -> None:
        self._replies.extend(replies)

    def request(self, **kwargs):
        self.calls.append(kwargs)
        if not self._replies:
            raise AssertionError(f"Unexpected request: {kwargs['method']} {kwargs['url']}")
        reply = self._replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


def create_test_token(
    subject: str = DEFAULT_TEST_SUBJECT,
    expired: bool = False,
    **extra_claims: Any,
) -> str:
    """Create an HS256 token with ``sub``, ``iat`` and ``exp`` claims."""
    now = datetime.now(timezone.utc)
    expiry_time = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload: dict[str, Any] = {
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int(expiry_time.timestamp()),
        **extra_claims,
    }
    return jwt.encode(payload, TEST_TOKEN_SECRET, algorithm="HS256")
