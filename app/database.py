import logging
from motor.motor_asyncio import AsyncIOMotorClient
from typing import Optional
from pymongo import ASCENDING, DESCENDING

from app.config import settings

logger = logging.getLogger(__name__)


class Database:
    client: Optional[AsyncIOMotorClient] = None

    @classmethod
    async def connect_db(cls):
        """Connect to MongoDB"""
        cls.client = AsyncIOMotorClient(settings.mongodb_url)
        logger.info("[OK] Connected to MongoDB")

        # Create indexes
        await cls.create_indexes()

    @classmethod
    async def create_indexes(cls):
        """Create database indexes"""
        db = cls.get_db()

        # Participants: the secret is the identity
        try:
            await db.participants.create_index([("unique_string", ASCENDING)], unique=True)
            logger.info("[OK] Created unique index on participants.unique_string")
        except Exception as e:
            logger.warning(f"[WARN] Index on participants.unique_string may already exist: {e}")

        # Admins
        try:
            await db.admins.create_index([("username", ASCENDING)], unique=True)
            logger.info("[OK] Created unique index on admins.username")
        except Exception as e:
            logger.warning(f"[WARN] Index on admins.username may already exist: {e}")

        # Photos
        try:
            await db.photos.create_index([("participant_unique_string", ASCENDING)])
            await db.photos.create_index([("upload_date", DESCENDING)])
            await db.photos.create_index([("likes", DESCENDING), ("upload_date", DESCENDING)])
            await db.photos.create_index([("is_winner", ASCENDING)])
            logger.info("[OK] Created indexes on photos")
        except Exception as e:
            logger.warning(f"[WARN] Indexes on photos may already exist: {e}")

        # Winners: at most one record per photo
        try:
            await db.winners.create_index([("photo_id", ASCENDING)], unique=True)
            await db.winners.create_index([("declared_at", DESCENDING)])
            logger.info("[OK] Created indexes on winners")
        except Exception as e:
            logger.warning(f"[WARN] Indexes on winners may already exist: {e}")

    @classmethod
    async def close_db(cls):
        """Close MongoDB connection"""
        if cls.client:
            cls.client.close()
            logger.info("[OK] Disconnected from MongoDB")

    @classmethod
    def get_db(cls):
        """Get database instance"""
        return cls.client[settings.database_name]


async def get_database():
    """Dependency to get database"""
    return Database.get_db()
