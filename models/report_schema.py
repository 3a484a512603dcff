from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

Score = Field(ge=0, le=100)


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    competition: float = Score
    complementary: float = Score
    accessibility: float = Score
    density: float = Score


class ViabilityScores(BaseModel):
    """The scoring reply expected from the model."""

    model_config = ConfigDict(strict=True, extra="ignore")

    densityScore: float = Score
    scores: ScoreBreakdown
    verdict: str = Field(min_length=1)


class MapCounts(BaseModel):
    competition: int = Field(ge=0)
    complementary: int = Field(ge=0)
    accessibility: int = Field(ge=0)


class ReportCreate(BaseModel):
    data: ViabilityScores
    counts: MapCounts
    created_at: datetime  # When the report record was created

    model_config = ConfigDict(from_attributes=True)
