"""
FastAPI dependency injection.

Dependencies provide the settings and the object store to route
handlers. Both are built once per process by the application factory
and its lifespan, and stored on `app.state`; nothing here constructs
clients per request.

Tests inject their own settings and store through `create_app`.
"""

from typing import Annotated

from fastapi import Depends, Request

from ..config.settings import Settings
from ..core.keys import KeyLayout
from ..infrastructure.storage.client import ObjectStore


def get_app_settings(request: Request) -> Settings:
    """Provide the settings the application was created with."""
    return request.app.state.settings


def get_object_store(request: Request) -> ObjectStore:
    """
    Provide the process-wide object store.

    The store wraps a single boto3 client that is shared by all request
    threads; boto3 clients are safe for concurrent use.
    """
    return request.app.state.object_store


def get_key_layout(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> KeyLayout:
    """Provide the literal key segments from settings."""
    return settings.key_layout


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

# These type aliases make route signatures cleaner
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
ObjectStoreDep = Annotated[ObjectStore, Depends(get_object_store)]
KeyLayoutDep = Annotated[KeyLayout, Depends(get_key_layout)]
