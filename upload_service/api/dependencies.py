"""
Request-scoped access to shared application state.

Settings and the object store are created once in the application lifespan
and kept on ``app.state``. Handlers look them up through these functions
instead of module-level globals, so tests can build an app around their own
settings and store.
"""

from fastapi import Request

from ..config.settings import Settings
from ..infrastructure.storage.client import ObjectStore


def get_app_settings(request: Request) -> Settings:
    """Provide the settings the running app was created with."""
    return request.app.state.settings


def get_object_store(request: Request) -> ObjectStore:
    """Provide the shared object store built at startup."""
    return request.app.state.object_store
