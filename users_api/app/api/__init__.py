"""
API package containing the HTTP routes.

The top‑level ``router`` in ``router.py`` aggregates the endpoint
modules found in ``endpoints``.
"""
