"""
Test suite for the tareas client.

This package contains:
- unit/: client, response handling, token, storage and config tests
- integration/: login and registration screens driven through Flask
"""
