"""
Common dependencies for FastAPI routes.

Long-lived components are built once in `create_app` and kept on `app.state`;
these helpers hand them to route handlers.
"""

from fastapi import Request

from app.core.exceptions import ServiceUnavailableException
from app.tasks.store import TaskStore
from app.zips.service import ZipLookupService


def get_zip_service(request: Request) -> ZipLookupService:
    """Dependency returning the shared lookup service."""
    return request.app.state.zip_service


def get_task_store(request: Request) -> TaskStore:
    """Dependency returning the task store, or 503 when none is configured."""
    store = getattr(request.app.state, "task_store", None)
    if store is None:
        raise ServiceUnavailableException("Task store is not configured")
    return store
