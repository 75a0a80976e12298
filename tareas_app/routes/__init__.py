"""
Routes package for the tareas client.

This package contains route blueprints:
- views: login, registration and task list pages
"""
