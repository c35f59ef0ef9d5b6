"""
Application package initializer.

This package contains the application factory and its submodules: the
HTTP layer lives in ``api``, request/response models in ``schemas``,
persistence in ``services`` and configuration, logging and database
bootstrap in ``core``.
"""

from .main import app  # noqa: F401
