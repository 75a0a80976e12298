"""
Shared pytest fixtures for the tareas client test suite.

The client talks to a remote API, so no fixture here opens a socket:
requests go to a :class:`~tests.helpers.RecordingSession` that records
what was sent and replays queued fake responses.  The credential store is
the in-memory implementation, fresh for every test.
"""

from __future__ import annotations

import os

import pytest
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from tareas_app import create_app
from tareas_app.client import ApiClient
from tareas_app.storage import MemoryCredentialStore
from tests.helpers import BASE_URL, RecordingSession

fake = Faker()


@pytest.fixture
def store():
    """Provide an empty in-memory credential store."""
    return MemoryCredentialStore()


@pytest.fixture
def fake_session():
    """Provide a recording HTTP session with no queued replies."""
    return RecordingSession()


@pytest.fixture
def api(store, fake_session):
    """Provide an API client wired to the in-memory store and fake session."""
    return ApiClient(base_url=BASE_URL, store=store, session=fake_session)


@pytest.fixture
def credentials() -> tuple[str, str]:
    """Generate a random, well-formed email and password pair."""
    return fake.email(), fake.password(length=12)


@pytest.fixture
def app(api):
    """
    Provide a Flask application using the test API client.

    Function-scoped because the client carries per-test fakes.
    """
    application = create_app("testing", api_client=api)
    yield application


@pytest.fixture
def client(app):
    """
    Provide a Flask test client scoped to a single test function.

    Opens a new test-client context for every test so that request
    state (cookies, flashed messages) never leaks between tests.
    """
    with app.test_client() as test_client:
        yield test_client
