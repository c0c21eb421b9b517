"""
Application configuration using Pydantic Settings.
Loads from environment variables / .env file.
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings

from app.zips.loader import DatasetFormat


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "Zips API"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Server bind address, e.g. "localhost:8000" (required)
    ADDR: str

    # Dataset: read from DATA_DIR/zips.<format>
    DATA_DIR: Path = Path("data")
    DATASET_FORMAT: DatasetFormat = DatasetFormat.CSV

    # CORS
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    # MongoDB (tasks); empty URI disables the task endpoints
    MONGO_URI: str = ""
    MONGO_DB_NAME: str = "zipsvr"
    TASKS_COLLECTION: str = "tasks"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("DATASET_FORMAT", mode="before")
    @classmethod
    def parse_dataset_format(cls, v):
        if isinstance(v, DatasetFormat):
            return v
        return DatasetFormat.from_name(v)

    @property
    def dataset_path(self) -> Path:
        return self.DATA_DIR / f"zips.{self.DATASET_FORMAT.value}"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
