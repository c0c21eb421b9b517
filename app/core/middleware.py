"""Shared FastAPI middleware."""

from __future__ import annotations

import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


logger = logging.getLogger("app.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every request on entry (method, path) and on exit (status, elapsed time).

    Wraps the whole app, so route handlers stay unaware of it.
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        method = request.method
        path = request.url.path
        logger.info(f"{method} {path}")

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.exception(f"{method} {path} failed after {elapsed_ms:.2f}ms")
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{method} {path} -> {response.status_code} in {elapsed_ms:.2f}ms")
        return response
