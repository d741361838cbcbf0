"""Common dependencies for FastAPI routes."""

from __future__ import annotations

from fastapi import Request

from receipt_points.services.storage_service import MemoryStorage, Storage


def get_storage(request: Request) -> Storage:
    """Return the record store attached to the running application.

    The store is created by the application lifespan. Apps assembled
    without it (e.g. a bare router in tests) get one lazily.
    """
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        storage = MemoryStorage()
        request.app.state.storage = storage
    return storage
