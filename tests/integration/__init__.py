"""
Integration tests for the tareas client screens.

Tests use the Flask test client with the API client wired to a recording
fake session, covering form validation, error display and redirects.
"""
