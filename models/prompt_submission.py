from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing import Any, Dict, Mapping

from utils.errors import SubmissionValidationError

SUBMISSION_FIELDS = ("business", "location", "lat", "lon")


class PromptSubmission(BaseModel):
    """A business idea and where it would open. Never persisted."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    business: str = Field(min_length=1)
    location: str = Field(min_length=1)
    lat: str = Field(min_length=1)
    lon: str = Field(min_length=1)

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def numbers_as_text(cls, value):
        # JSON clients may send coordinates as numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("lat")
    @classmethod
    def latitude_in_range(cls, value):
        return _coordinate(value, 90.0)

    @field_validator("lon")
    @classmethod
    def longitude_in_range(cls, value):
        return _coordinate(value, 180.0)


def _coordinate(value: str, bound: float) -> str:
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"must be a number between -{bound:g} and {bound:g}")
    if not -bound <= number <= bound:
        raise ValueError(f"must be a number between -{bound:g} and {bound:g}")
    return value


def _error_message(error: Dict[str, Any]) -> str:
    field = str(error["loc"][0]) if error.get("loc") else "prompt"
    kind = error.get("type")
    if kind == "missing":
        return f'"{field}" is required'
    if kind == "string_too_short":
        return f'"{field}" is not allowed to be empty'
    if kind == "string_type":
        return f'"{field}" must be a string'
    if kind == "value_error":
        return f'"{field}" {error["ctx"]["error"]}'
    return f'"{field}" {error["msg"]}'


def validate_submission(data: Mapping[str, Any]) -> PromptSubmission:
    """
    Validate a raw submission payload.
    All field problems are reported at once, comma-joined, as a
    SubmissionValidationError (HTTP 400).
    """
    fields = {key: data[key] for key in SUBMISSION_FIELDS if data.get(key) is not None}
    try:
        return PromptSubmission(**fields)
    except ValidationError as e:
        raise SubmissionValidationError(",".join(_error_message(err) for err in e.errors()))


def extract_submission_fields(request) -> Dict[str, Any]:
    """
    Pull the submission out of a Flask request.

    Accepts JSON bodies shaped either {"prompt": {...}} or flat, and form
    posts using either ``prompt[business]`` style keys or bare names.
    """
    if request.is_json:
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            body = {}
        if isinstance(body.get("prompt"), dict):
            body = body["prompt"]
        return {key: body.get(key) for key in SUBMISSION_FIELDS}

    form = request.form
    return {
        key: form.get(f"prompt[{key}]", form.get(key))
        for key in SUBMISSION_FIELDS
    }
