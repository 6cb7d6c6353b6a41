"""
MongoDB Connection Utility

MongoDB stores short-lived API payloads (job listings, job details) so hot
read paths skip the relational database. Documents expire through a TTL
index on `expires_at`.
"""
import logging

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from jobboard.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        )
    return _client


def get_mongo_db() -> Database:
    """Get the cache database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    db = get_mongo_db()
    return db[name]


def check_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning(f"MongoDB connection failed: {e}")
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "response_cache": "response_cache",
}


def init_mongo_indexes():
    """
    Create indexes for the cache collection.
    Call this once during app startup.
    """
    db = get_mongo_db()
    cache = db[COLLECTIONS["response_cache"]]

    cache.create_index([("key", ASCENDING)], unique=True)
    # expireAfterSeconds=0: each document carries its own absolute expiry
    cache.create_index("expires_at", expireAfterSeconds=0)

    logger.info("MongoDB indexes created successfully")
