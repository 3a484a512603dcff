import logging
from bson.errors import InvalidId
from bson.objectid import ObjectId
from datetime import datetime, timezone
from pymongo.errors import DuplicateKeyError
from typing import Any, Dict, Optional, Tuple

from models.user import UserCreate
from utils.errors import MarketMapperError
from utils.json_converter import rename_id_field
from utils.mongodb import USERS

logger = logging.getLogger(__name__)


class UserRepository:
    """Users keyed by their Google account id. Created once, never updated."""

    def __init__(self, db):
        self.collection = db[USERS]

    def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError):
            return None
        return rename_id_field(self.collection.find_one({"_id": object_id}))

    def find_by_google_id(self, google_id: str) -> Optional[Dict[str, Any]]:
        return rename_id_field(self.collection.find_one({"google_id": google_id}))

    def find_or_create(self, google_id: str, name: str, email: str) -> Tuple[Dict[str, Any], bool]:
        """
        Return (user, created). An existing user is returned untouched; a new
        one is inserted with $setOnInsert so concurrent callbacks for the same
        id still produce a single document.
        """
        existing = self.find_by_google_id(google_id)
        if existing:
            return existing, False

        user = UserCreate(
            google_id=google_id,
            name=name,
            email=email,
            created_at=datetime.now(timezone.utc),
        )
        try:
            result = self.collection.update_one(
                {"google_id": google_id},
                {"$setOnInsert": user.model_dump()},
                upsert=True,
            )
        except DuplicateKeyError:
            # another callback inserted the same google_id first
            return self.find_by_google_id(google_id), False
        except Exception as e:
            raise MarketMapperError(f"Error creating user: {e}")

        created = result.upserted_id is not None
        if created:
            logger.info(f"User inserted successfully: {result.upserted_id}")
        return self.find_by_google_id(google_id), created

    def count(self) -> int:
        return self.collection.count_documents({})
