"""
Unit tests for configuration lookup and app-factory wiring.

Checks that each environment name maps to its configuration class and
that ``create_app`` builds the credential store the configuration asks
for.
"""

from __future__ import annotations

import pytest

from config import DevelopmentConfig, ProductionConfig, TestingConfig, get_config
from tareas_app import create_app
from tareas_app.client import ApiClient
from tareas_app.storage import FileCredentialStore, MemoryCredentialStore

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("env", "expected"),
    [
        ("development", DevelopmentConfig),
        ("testing", TestingConfig),
        ("production", ProductionConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config_maps_environment_names(env, expected):
    """Test that known names resolve to their class and unknown ones to the default."""
    # Act & Assert
    assert get_config(env) is expected


def test_get_config_reads_flask_env(monkeypatch):
    """Test that FLASK_ENV is used when no name is passed."""
    # Arrange
    monkeypatch.setenv("FLASK_ENV", "production")

    # Act & Assert
    assert get_config() is ProductionConfig


def test_create_app_uses_memory_store_for_testing():
    """Test that the testing configuration never touches the disk."""
    # Act
    app = create_app("testing")

    # Assert
    api = app.extensions["tareas_api"]
    assert isinstance(api, ApiClient)
    assert isinstance(api.store, MemoryCredentialStore)
    assert api.base_url == TestingConfig.API_BASE_URL


def test_create_app_builds_file_store(monkeypatch, tmp_path):
    """Test that the file store is created at the configured path."""
    # Arrange
    path = tmp_path / "credentials.json"
    monkeypatch.setattr(TestingConfig, "CREDENTIAL_STORE", "file")
    monkeypatch.setattr(TestingConfig, "CREDENTIALS_PATH", str(path))

    # Act
    app = create_app("testing")

    # Assert
    store = app.extensions["tareas_api"].store
    assert isinstance(store, FileCredentialStore)
    assert store.path == path


def test_create_app_rejects_unknown_store(monkeypatch):
    """Test that a misspelled store setting fails loudly at startup."""
    # Arrange
    monkeypatch.setattr(TestingConfig, "CREDENTIAL_STORE", "cloud")

    # Act & Assert
    with pytest.raises(ValueError, match="CREDENTIAL_STORE"):
        create_app("testing")
