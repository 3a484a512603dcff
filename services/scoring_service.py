import json
import logging
from pydantic import ValidationError

from models.report_schema import ViabilityScores
from services import prompts
from services.llm_functions import clean_model_text
from utils.errors import ScoringParseError

logger = logging.getLogger(__name__)


def parse_viability_scores(text: str) -> ViabilityScores:
    """
    Decode the scoring reply. Anything other than one JSON object matching
    ViabilityScores raises ScoringParseError.
    """
    cleaned_text = clean_model_text(text)
    try:
        payload = json.loads(cleaned_text)
    except json.JSONDecodeError as e:
        logger.error(f"Scoring reply is not valid JSON: {e}")
        raise ScoringParseError("The AI scoring reply was not valid JSON.")

    if not isinstance(payload, dict):
        raise ScoringParseError("The AI scoring reply was not a JSON object.")

    try:
        return ViabilityScores.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) or "reply" for err in e.errors())
        logger.error(f"Scoring reply failed validation: {e.errors()}")
        raise ScoringParseError(f"The AI scoring reply had an unexpected shape ({fields}).")


class ScoringService:
    def __init__(self, model):
        self.model = model

    def score(self, submission, counts) -> ViabilityScores:
        reply = self.model.generate(prompts.scoring_prompt(submission, counts), "scoring")
        return parse_viability_scores(reply.content)
