"""
MongoDB database connection and utilities.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase


logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect(cls, uri: str, db_name: str):
        """Connect to MongoDB. Motor connects lazily on first operation."""
        cls.client = AsyncIOMotorClient(uri)
        cls.db = cls.client[db_name]
        logger.info(f"Connected to MongoDB: {db_name}")

    @classmethod
    async def disconnect(cls):
        """Disconnect from MongoDB."""
        if cls.client:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("Disconnected from MongoDB")

    @classmethod
    def get_collection(cls, name: str):
        """Get a collection by name."""
        return cls.db[name]
