import logging
import time
from dataclasses import dataclass
from typing import Any, Dict

from models.report_schema import MapCounts
from services.query_synthesis_service import OverpassQueries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisOutcome:
    report: Dict[str, Any]
    queries: OverpassQueries
    counts: Dict[str, int]


class MarketAnalysisService:
    """
    One viability analysis, start to finish:
    query synthesis -> map fetches -> scoring -> report.

    Steps run strictly in sequence. Any failure propagates and nothing is
    written, so a report exists only when every upstream call succeeded.
    """

    def __init__(self, synthesizer, overpass, scorer, reports):
        self.synthesizer = synthesizer
        self.overpass = overpass
        self.scorer = scorer
        self.reports = reports

    def run(self, submission) -> AnalysisOutcome:
        start_time = time.time()
        logger.info(f"Analysing '{submission.business}' at {submission.location} ({submission.lat}, {submission.lon})")

        queries = self.synthesizer.synthesize(submission)
        map_data = self.overpass.fetch_all(queries)
        counts = map_data.counts()
        scores = self.scorer.score(submission, counts)
        report = self.reports.create(scores, MapCounts(**counts))

        logger.info(f"Analysis finished in {time.time() - start_time:.2f}s, report {report['id']}")
        return AnalysisOutcome(report=report, queries=queries, counts=counts)
