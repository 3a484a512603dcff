import logging
import time
import requests
from dataclasses import dataclass
from typing import Any, Dict, List

from utils.errors import MapDataError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverpassResult:
    elements: List[Dict[str, Any]]

    @property
    def count(self) -> int:
        return len(self.elements)


@dataclass(frozen=True)
class MapDataBundle:
    competition: OverpassResult
    complementary: OverpassResult
    accessibility: OverpassResult

    def counts(self) -> Dict[str, int]:
        return {
            "competition": self.competition.count,
            "complementary": self.complementary.count,
            "accessibility": self.accessibility.count,
        }


class OverpassClient:
    """
    Runs Overpass QL queries with GET ?data=<query>.
    Every request first takes a token from the shared rate limiter.
    A failed request is not retried.
    """

    def __init__(self, session: requests.Session, settings, rate_limiter):
        self.session = session
        self.base_url = settings.overpass_url
        self.timeout = settings.overpass_timeout_seconds
        self.rate_limiter = rate_limiter

    def fetch(self, query: str, label: str = "overpass") -> OverpassResult:
        self.rate_limiter.acquire()
        start_time = time.time()
        try:
            response = self.session.get(self.base_url, params={"data": query}, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Overpass request '{label}' failed: {e}")
            raise MapDataError(f"Map data request for {label} failed: {e}")

        elapsed = time.time() - start_time
        if not 200 <= response.status_code < 300:
            logger.error(f"Overpass '{label}' returned HTTP {response.status_code} after {elapsed:.2f}s")
            if response.status_code == 429:
                raise MapDataError(f"Map data rate limit hit while fetching {label} (HTTP 429)")
            raise MapDataError(f"Map data request for {label} returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError:
            raise MapDataError(f"Map data response for {label} was not JSON")

        elements = payload.get("elements") if isinstance(payload, dict) else None
        if not isinstance(elements, list):
            raise MapDataError(f"Map data response for {label} had no element list")

        logger.info(f"Overpass '{label}' returned {len(elements)} elements in {elapsed:.2f}s")
        return OverpassResult(elements=elements)

    def fetch_all(self, queries) -> MapDataBundle:
        # Strictly one after another; the limiter spaces them out
        return MapDataBundle(
            competition=self.fetch(queries.competition, "competition"),
            complementary=self.fetch(queries.complementary, "complementary"),
            accessibility=self.fetch(queries.accessibility, "accessibility"),
        )
