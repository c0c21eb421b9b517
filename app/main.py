"""
Zips API - Main application entry point.

Loads a postal code dataset at startup, indexes it by city and serves
lookups over HTTP. Run with the `zipsvr` console script (or
`python -m app.main`) after setting ADDR, e.g. `export ADDR=localhost:8000`.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional, Tuple

import uvicorn
from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from app.core.config import Settings, get_settings
from app.core.database import Database
from app.core.logging_config import setup_logging
from app.core.middleware import RequestLoggingMiddleware
from app.tasks.store import MongoTaskStore, TaskStore
from app.tasks.views import router as tasks_router
from app.zips.index import CityIndex
from app.zips.loader import LoadError, load_records_from_path
from app.zips.service import ZipLookupService
from app.zips.views import router as zips_router

logger = logging.getLogger(__name__)


def greet(name: Optional[str] = None) -> str:
    return f"Hello {name or 'World'}"


def load_city_index(settings: Settings) -> CityIndex:
    """Load the configured dataset and index it. Raises LoadError."""
    records = load_records_from_path(settings.dataset_path, settings.DATASET_FORMAT)
    index = CityIndex.build(records)
    logger.info(f"Indexed {index.record_count} zips across {len(index)} cities")
    return index


def parse_addr(addr: str) -> Tuple[str, int]:
    """Split "host:port" into its parts; an empty host binds all interfaces."""
    host, sep, port = addr.strip().rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid ADDR {addr!r}, expected host:port")
    host = host.strip("[]") or "0.0.0.0"
    return host, int(port)


def create_app(
    settings: Optional[Settings] = None,
    index: Optional[CityIndex] = None,
    task_store: Optional[TaskStore] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    `index` and `task_store` may be injected; otherwise the dataset is loaded
    from settings (LoadError propagates) and, when MONGO_URI is set, tasks are
    stored in MongoDB.
    """
    settings = settings or get_settings()
    if index is None:
        index = load_city_index(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan - startup and shutdown events."""
        connected = False
        if app.state.task_store is None and settings.MONGO_URI:
            await Database.connect(settings.MONGO_URI, settings.MONGO_DB_NAME)
            app.state.task_store = MongoTaskStore(Database.get_collection(settings.TASKS_COLLECTION))
            connected = True
        yield
        if connected:
            await Database.disconnect()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Postal code lookups by city, plus a small task store.",
        lifespan=lifespan,
    )
    app.state.zip_service = ZipLookupService(index)
    app.state.task_store = task_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(zips_router)
    app.include_router(tasks_router)

    @app.get("/hello", response_class=PlainTextResponse, tags=["Health"])
    async def hello(name: str = Query("", description="Who to greet")):
        """Smoke-test endpoint."""
        return greet(name)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Detailed health check."""
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "zips": index.record_count,
            "cities": len(index),
            "tasks": "configured" if app.state.task_store is not None else "disabled",
        }

    return app


def main() -> int:
    setup_logging()
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.critical(f"Invalid configuration (is the ADDR environment variable set?): {e}")
        return 1
    logging.getLogger().setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    try:
        host, port = parse_addr(settings.ADDR)
    except ValueError as e:
        logger.critical(str(e))
        return 1

    try:
        index = load_city_index(settings)
    except LoadError as e:
        logger.critical(f"error loading zips: {e}")
        return 1

    app = create_app(settings, index=index)
    logger.info(f"Server is listening at {host}:{port}...")
    uvicorn.run(app, host=host, port=port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
