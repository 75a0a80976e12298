"""
HTML view routes for the tareas client.

Implements the two screens of the client -- login and registration -- plus
the small set of routes around them (logout, the post-login task list and
a health probe).  Each screen validates its form locally, calls the shared
:class:`~tareas_app.client.ApiClient`, and on failure re-renders itself
with the client's error message shown verbatim.

The views hold no state of their own: the bearer token lives in the
client's credential store, and a failed call leaves everything as it was
before the form was submitted.
"""

from __future__ import annotations

import logging

from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)

from ..client import ApiClient, is_valid_email
from ..errors import ApiError, ProtocolError, TransportError, ValidationError

logger = logging.getLogger(__name__)

views_bp = Blueprint("views", __name__)

MIN_PASSWORD_LENGTH = 8


# =====================================================================
# Helper Functions
# =====================================================================


def _api() -> ApiClient:
    """Return the API client registered on the current application."""
    return current_app.extensions["tareas_api"]


def _error_status(error: ApiError) -> int:
    """
    Choose the HTTP status for a page that reports *error*.

    Local validation failures are the user's to fix (400).  A client error
    reported by the server is passed through; anything else the server or
    the network got wrong becomes 502 or 503.
    """
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, TransportError):
        return 503
    if isinstance(error, ProtocolError) and 400 <= error.status_code < 500:
        return error.status_code
    return 502


# =====================================================================
# Authentication Routes
# =====================================================================


@views_bp.route("/health", methods=["GET"])
def health_check():
    """Liveness probe; does not contact the API."""
    return {"status": "healthy", "service": "tareas-client"}, 200


@views_bp.route("/", methods=["GET"])
def index():
    """
    Send the root URL to the login screen.

    Returns:
        A redirect to the login page.
    """
    return redirect(url_for("views.login"))


@views_bp.route("/login", methods=["GET"])
def login():
    """Render the login screen, or skip it when the session is still valid."""
    if not _api().is_token_expired():
        return redirect(url_for("views.tareas"))
    return render_template("login.html")


@views_bp.route("/login", methods=["POST"])
def login_submit():
    """
    Handle login form submission.

    Both fields are required.  On success the API client has already
    stored the token, so the user is sent to the task list.

    Returns:
        A redirect to the task list on success, or the re-rendered
        ``login.html`` template with a flash message on failure.
    """
    email = request.form.get("email", "").strip()
    password = request.form.get("password", "")
    if not email or not password:
        flash("Please enter your email and password.", "error")
        return render_template("login.html", email=email), 400

    try:
        _api().login(email, password)
    except ApiError as exc:
        flash(str(exc), "error")
        return render_template("login.html", email=email), _error_status(exc)

    return redirect(url_for("views.tareas"))


@views_bp.route("/register", methods=["GET"])
def register():
    """
    Render the registration screen.

    Returns:
        The rendered ``register.html`` template.
    """
    return render_template("register.html")


@views_bp.route("/register", methods=["POST"])
def register_submit():
    """
    Handle registration form submission.

    Trims both fields, then checks them in order: all fields present, a
    valid email address, and a password of at least
    ``MIN_PASSWORD_LENGTH`` characters.  Only then is the server called.

    Returns:
        A redirect to the login screen on success, or the re-rendered
        ``register.html`` template with a flash message on failure.
    """
    email = request.form.get("email", "").strip()
    password = request.form.get("password", "").strip()

    if not email or not password:
        flash("Please fill in all fields.", "error")
        return render_template("register.html", email=email), 400
    if not is_valid_email(email):
        flash("Enter a valid email address.", "error")
        return render_template("register.html", email=email), 400
    if len(password) < MIN_PASSWORD_LENGTH:
        flash(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.",
            "error",
        )
        return render_template("register.html", email=email), 400

    try:
        _api().register(email, password)
    except ApiError as exc:
        flash(str(exc), "error")
        return render_template("register.html", email=email), _error_status(exc)

    flash("Account created. You can now log in.", "success")
    return redirect(url_for("views.login"))


@views_bp.route("/logout", methods=["POST"])
def logout():
    """
    Forget the stored credential and return to the login screen.

    Only the local token is cleared; the server is not contacted.

    Returns:
        A redirect to the login page.
    """
    _api().logout()
    flash("You have been logged out.", "success")
    return redirect(url_for("views.login"))


# =====================================================================
# Task Routes
# =====================================================================


@views_bp.route("/tareas", methods=["GET"])
def tareas():
    """
    Render the task list shown after login.

    An expired or missing session sends the user back to the login
    screen.  Errors from the API are shown in place of the list.
    """
    api = _api()
    if api.is_token_expired():
        return redirect(url_for("views.login"))

    try:
        items = api.get_tareas() or []
    except ApiError as exc:
        flash(str(exc), "error")
        return render_template("tareas.html", tareas=[]), _error_status(exc)

    return render_template("tareas.html", tareas=items)
