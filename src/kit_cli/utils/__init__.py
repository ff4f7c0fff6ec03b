"""Shared utilities: logging setup, mapping access, and awaitable helpers.

Rules
-----
* No business logic.
* No user-facing output.
* Importable by any layer.
"""
