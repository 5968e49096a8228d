"""
MongoDB Connection Utility

MongoDB stores the portal's announcement feeds:
- notices: placement cell notices shown on the landing page
- events: upcoming talks, tests and drives with a date and venue

WHY MongoDB for these?
- Content-only documents, no joins with the relational records
- Fields vary per notice/event (links, attachments, venues)
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from app.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the placement_docs database"""
    global _db
    if _db is None:
        _db = get_mongo_client()[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    return get_mongo_db()[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        get_mongo_client().admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "notices": "notices",
    "events": "events",
}


def init_mongo_indexes():
    """
    Create indexes for the landing page feeds.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # Active notices, newest first
    db[COLLECTIONS["notices"]].create_index([
        ("is_active", ASCENDING),
        ("created_at", DESCENDING)
    ])

    # Active events, soonest first
    db[COLLECTIONS["events"]].create_index([
        ("is_active", ASCENDING),
        ("event_date", ASCENDING)
    ])

    logger.info("MongoDB indexes created successfully")
