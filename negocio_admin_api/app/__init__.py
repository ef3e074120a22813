"""
Application package.

The backend is split into ``core`` (configuration, logging, storage
bootstrap, error handlers), ``schemas`` (pydantic models), ``services``
(the in-memory storage and the report built on it) and ``api`` (one
router per collection).
"""

from .main import app  # noqa: F401
