import logging
from pymongo import MongoClient, ASCENDING, DESCENDING

logger = logging.getLogger(__name__)

USERS = "users"
REPORTS = "reports"
SESSIONS = "sessions"


def create_mongo_client(settings):
    """Create the MongoClient for the configured DATABASE_LINK."""
    try:
        client = MongoClient(settings.database_link)
        logger.info(f"MongoDB client created for database: {settings.mongo_db_name}")
        return client
    except Exception as e:
        logger.error("Failed to create MongoDB client", exc_info=True)
        raise e


def get_db(client, settings):
    """Return the database instance."""
    return client[settings.mongo_db_name]


def ensure_indexes(db):
    db[USERS].create_index([("google_id", ASCENDING)], unique=True)
    db[REPORTS].create_index([("created_at", DESCENDING)])
