"""Core module - config, database, logging, middleware, exceptions."""

from app.core.config import get_settings, Settings
from app.core.database import Database
from app.core.exceptions import (
    AppException,
    NotFoundException,
    BadRequestException,
    ServiceUnavailableException,
)

__all__ = [
    "get_settings",
    "Settings",
    "Database",
    "AppException",
    "NotFoundException",
    "BadRequestException",
    "ServiceUnavailableException",
]
