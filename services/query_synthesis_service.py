import logging
from dataclasses import dataclass

from services import prompts
from services.llm_functions import clean_model_text
from utils.errors import ModelServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverpassQueries:
    competition: str
    complementary: str
    accessibility: str


class QuerySynthesizer:
    """
    Asks the model for three Overpass queries, one call each.
    Model output is trusted: only code fences are removed before the query
    is sent on.
    """

    def __init__(self, model, radius_meters: int = 1000):
        self.model = model
        self.radius = radius_meters

    def _query(self, prompt: str, label: str) -> str:
        query = clean_model_text(self.model.generate(prompt, label).content)
        if not query:
            raise ModelServiceError(f"The AI model returned no query for {label}")
        logger.debug(f"{label} query: {query}")
        return query

    def synthesize(self, submission) -> OverpassQueries:
        return OverpassQueries(
            competition=self._query(prompts.competition_prompt(submission, self.radius), "competition"),
            complementary=self._query(prompts.complementary_prompt(submission, self.radius), "complementary"),
            accessibility=self._query(prompts.accessibility_prompt(submission, self.radius), "accessibility"),
        )
