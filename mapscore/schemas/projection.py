from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from mapscore.engine.enums import TutoringPackage

__all__ = [
    "PercentileLookupResponse",
    "ScoreLookupResponse",
    "GradeEquivalentResponse",
    "ProjectionRequest",
    "ScoreRead",
    "ProjectionRead",
    "RecommendationRead",
    "ProjectionResponse",
    "HoursToTargetRequest",
    "HoursToTargetResponse",
]


class PercentileLookupResponse(BaseModel):
    rit_score: float
    grade: int
    percentile: int


class ScoreLookupResponse(BaseModel):
    percentile: int
    grade: int
    rit_score: int


class GradeEquivalentResponse(BaseModel):
    rit_score: float
    grade_equivalent: float


class ProjectionRequest(BaseModel):
    grade: float
    rit_score: Optional[float] = None
    percentile: Optional[float] = None

    @model_validator(mode="after")
    def _require_score_or_percentile(self) -> "ProjectionRequest":
        if self.rit_score is None and self.percentile is None:
            raise ValueError("rit_score or percentile is required")
        return self


class ScoreRead(BaseModel):
    rit_score: float
    percentile: int
    grade: int


class ProjectionRead(BaseModel):
    package: TutoringPackage
    hours: int
    projected_rit_score: int
    projected_percentile: int
    improvement_points: int


class RecommendationRead(BaseModel):
    hours_to_grade_level: int = Field(ge=0)
    hours_to_stretch: int = Field(ge=0)
    recommended_package: TutoringPackage


class ProjectionResponse(BaseModel):
    score: ScoreRead
    effective_grade_level: float
    grade_level_score: int
    stretch_score: int
    projections: List[ProjectionRead]
    recommendation: RecommendationRead


class HoursToTargetRequest(BaseModel):
    current_score: float
    target_score: float


class HoursToTargetResponse(BaseModel):
    hours: int = Field(ge=0)
