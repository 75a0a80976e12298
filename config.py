"""
Configuration classes for the tareas client.

The client is a thin front end for the remote tareas REST API. It keeps no
data of its own apart from the bearer token, which lives in a small JSON
file on local disk. Configuration values are loaded from environment
variables with sensible defaults.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


def _optional_float(env_var: str) -> float | None:
    """Read a float from the environment, returning None when unset or blank."""
    raw_value = os.environ.get(env_var, "").strip()
    if not raw_value:
        return None
    return float(raw_value)


class Config:
    """Base configuration for all client environments."""

    SECRET_KEY: str = os.environ.get(
        "SECRET_KEY", "tareas-client-dev-secret-change-in-production"
    )

    API_BASE_URL: str = os.environ.get("API_BASE_URL", "http://localhost:5000/api")
    # Transport-level timeout handed to requests; None waits indefinitely.
    API_TIMEOUT: float | None = _optional_float("API_TIMEOUT")

    CREDENTIAL_STORE: str = os.environ.get("CREDENTIAL_STORE", "file")
    CREDENTIALS_PATH: str = os.environ.get(
        "CREDENTIALS_PATH",
        str(BASE_DIR / "instance" / "credentials.json"),
    )


class DevelopmentConfig(Config):
    """Configuration for local development."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Configuration for automated tests."""

    DEBUG: bool = True
    TESTING: bool = True

    API_BASE_URL: str = os.environ.get("TEST_API_BASE_URL", "http://tareas-api.test/api")
    API_TIMEOUT: float | None = _optional_float("TEST_API_TIMEOUT")
    # Tests never touch the disk-backed store unless they ask for it.
    CREDENTIAL_STORE: str = "memory"


class ProductionConfig(Config):
    """Configuration for production deployments."""

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Look up and return the configuration class for the given environment.

    Args:
        env: Environment name. When None, falls back to FLASK_ENV.

    Returns:
        The selected configuration class.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
