import logging
from bson.errors import InvalidId
from bson.objectid import ObjectId
from datetime import datetime, timezone
from pymongo import DESCENDING
from typing import Any, Dict, List, Optional

from models.report_schema import MapCounts, ReportCreate, ViabilityScores
from utils.errors import MarketMapperError
from utils.json_converter import json_converter, rename_id_field
from utils.mongodb import REPORTS

logger = logging.getLogger(__name__)


class ReportRepository:
    """Reports are written once per successful analysis and never modified."""

    def __init__(self, db):
        self.collection = db[REPORTS]

    def create(self, scores: ViabilityScores, counts: MapCounts) -> Dict[str, Any]:
        report = ReportCreate(data=scores, counts=counts, created_at=datetime.now(timezone.utc))
        try:
            inserted_id = self.collection.insert_one(report.model_dump()).inserted_id
        except Exception as e:
            raise MarketMapperError(f"Error creating report: {e}")

        logger.info(f"Report inserted successfully: {inserted_id}")
        return self.get(str(inserted_id))

    def get(self, report_id: str) -> Optional[Dict[str, Any]]:
        try:
            object_id = ObjectId(report_id)
        except (InvalidId, TypeError):
            return None
        document = self.collection.find_one({"_id": object_id})
        return json_converter(rename_id_field(document)) if document else None

    def list_all(self) -> List[Dict[str, Any]]:
        # Every report, newest first; history is neither paged nor scoped by owner
        cursor = self.collection.find().sort([("created_at", DESCENDING), ("_id", DESCENDING)])
        return [json_converter(rename_id_field(document)) for document in cursor]

    def count(self) -> int:
        return self.collection.count_documents({})
