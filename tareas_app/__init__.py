"""
Tareas client Flask application factory.

Provides the ``create_app`` factory that assembles the on-device client:
the login and registration screens, rendered server-side with Jinja, and
the :class:`~tareas_app.client.ApiClient` they use to reach the remote
tareas API.

The client never owns task data -- everything is fetched from the server
on demand.  The only local state is the bearer token, kept in the
credential store selected by configuration.
"""

from __future__ import annotations

import logging

from flask import Flask

from config import get_config

from .client import ApiClient
from .storage import CredentialStore, FileCredentialStore, MemoryCredentialStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _build_credential_store(app: Flask) -> CredentialStore:
    """Create the credential store named by ``CREDENTIAL_STORE``."""
    kind = app.config["CREDENTIAL_STORE"]
    if kind == "memory":
        return MemoryCredentialStore()
    if kind == "file":
        return FileCredentialStore(app.config["CREDENTIALS_PATH"])
    raise ValueError(f"Unknown CREDENTIAL_STORE setting: {kind!r}")


def create_app(config_name: str | None = None, api_client: ApiClient | None = None) -> Flask:
    """
    Create and configure the client application.

    Args:
        config_name: Optional configuration environment name
            (``"development"``, ``"testing"``, ``"production"``).  When
            *None*, the value is read from the ``FLASK_ENV`` environment
            variable, defaulting to ``"development"``.
        api_client: Pre-built client to use instead of one assembled from
            configuration.  Tests pass one wired to fakes.

    Returns:
        A configured :class:`~flask.Flask` application with the API client
        available as ``app.extensions["tareas_api"]``.
    """
    app = Flask(__name__, instance_relative_config=True)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating tareas client app with config: %s", config_class.__name__)

    if api_client is None:
        api_client = ApiClient(
            base_url=app.config["API_BASE_URL"],
            store=_build_credential_store(app),
            timeout=app.config["API_TIMEOUT"],
        )
    app.extensions["tareas_api"] = api_client

    # Import inside the factory to avoid circular imports -- the blueprint
    # module references helpers from this package, which must exist first.
    from .routes.views import views_bp

    app.register_blueprint(views_bp)
    return app
