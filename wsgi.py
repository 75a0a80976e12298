"""WSGI entry point for the tareas client."""

import os

from tareas_app import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
