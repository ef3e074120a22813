"""
Top-level package for the Negócio Admin API.

All functionality lives in submodules under ``app``; importing
``negocio_admin_api.app.main`` builds the ASGI application.
"""

__all__ = []
