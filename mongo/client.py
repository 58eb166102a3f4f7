#!/usr/bin/env python3
"""Direct MongoDB client using Motor (async PyMongo)"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
import asyncio
import logging

# Configure logging
logger = logging.getLogger(__name__)
from mongo.constants import (
    DATABASE_NAME,
    MONGODB_CONNECTION_STRING,
    MONGODB_MAX_POOL_SIZE,
    MONGODB_SERVER_SELECTION_TIMEOUT_MS,
)


class DirectMongoClient:
    """Lazily connected Motor client shared by all requests"""

    def __init__(self, uri: str = MONGODB_CONNECTION_STRING, database: str = DATABASE_NAME):
        self.uri = uri
        self.database_name = database
        self.client: AsyncIOMotorClient | None = None
        self.connected = False
        self._connect_lock = asyncio.Lock()

    async def connect(self):
        """Initialize MongoDB connection with a persistent connection pool"""
        try:
            async with self._connect_lock:
                if self.connected and self.client:
                    return

                # Motor maintains persistent connections automatically
                self.client = AsyncIOMotorClient(
                    self.uri,
                    maxPoolSize=MONGODB_MAX_POOL_SIZE,
                    serverSelectionTimeoutMS=MONGODB_SERVER_SELECTION_TIMEOUT_MS,
                )

                # Test connection
                await self.client.admin.command('ping')

                self.connected = True
                logger.info(f"Connected to MongoDB database '{self.database_name}'")

        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    async def disconnect(self):
        """Disconnect from MongoDB"""
        if self.client:
            self.client.close()
        self.connected = False
        self.client = None

    @property
    def database(self) -> AsyncIOMotorDatabase:
        if not self.client:
            raise RuntimeError("MongoDB client not initialized. Call connect() first.")
        return self.client[self.database_name]


# Global instance
direct_mongo_client = DirectMongoClient()
