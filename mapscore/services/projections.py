from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from mapscore.core.errors import ValidationError
from mapscore.core.logging import get_logger
from mapscore.engine.norms import get_reference_tables
from mapscore.engine.norms.loader import ReferenceTables
from mapscore.engine.norms.tables import normalize_grade, normalize_percentile
from mapscore.engine.projection import (
    build_projections,
    build_recommendation,
    effective_grade_level,
    grade_level_score,
    stretch_score,
)
from mapscore.engine.types import Projection, Recommendation, Score

__all__ = ["StudentProjection", "complete_score", "build_student_projection"]

logger = get_logger("mapscore.services.projections", component="service")


@dataclass(frozen=True, slots=True)
class StudentProjection:
    """Everything a parent chart needs for one subject."""

    score: Score
    effective_grade_level: float
    grade_level_score: int
    stretch_score: int
    projections: List[Projection]
    recommendation: Recommendation

    def as_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score.as_dict(),
            "effective_grade_level": self.effective_grade_level,
            "grade_level_score": self.grade_level_score,
            "stretch_score": self.stretch_score,
            "projections": [projection.as_dict() for projection in self.projections],
            "recommendation": self.recommendation.as_dict(),
        }


def complete_score(
    grade: float,
    rit_score: Optional[float] = None,
    percentile: Optional[float] = None,
    *,
    tables: Optional[ReferenceTables] = None,
) -> Score:
    """Fill in whichever of RIT score or percentile an imported record lacks.

    Values that are present are kept (percentile rounded and clamped to
    1-99). At least one of the two is required.
    """
    tables = tables if tables is not None else get_reference_tables()
    valid_grade = normalize_grade(grade)
    if rit_score is None and percentile is None:
        raise ValidationError(
            "Either rit_score or percentile is required", detail={"grade": valid_grade}
        )
    if rit_score is None:
        valid_percentile = normalize_percentile(percentile)
        rit_score = tables.percentiles.score_from_percentile(valid_percentile, valid_grade)
        return Score(rit_score=rit_score, percentile=valid_percentile, grade=valid_grade)
    if percentile is None:
        derived = tables.percentiles.percentile_from_score(rit_score, valid_grade)
        return Score(rit_score=rit_score, percentile=derived, grade=valid_grade)
    return Score(rit_score=rit_score, percentile=normalize_percentile(percentile), grade=valid_grade)


def build_student_projection(
    score: Score,
    *,
    tables: Optional[ReferenceTables] = None,
) -> StudentProjection:
    tables = tables if tables is not None else get_reference_tables()
    result = StudentProjection(
        score=score,
        effective_grade_level=effective_grade_level(score.rit_score, tables=tables),
        grade_level_score=grade_level_score(score.grade, tables=tables),
        stretch_score=stretch_score(score.grade, tables=tables),
        projections=build_projections(score.rit_score, score.percentile),
        recommendation=build_recommendation(score, tables=tables),
    )
    logger.debug(
        "student_projection_built",
        extra={
            "structured_data": {
                "grade": score.grade,
                "rit_score": score.rit_score,
                "recommended_package": result.recommendation.recommended_package.value,
            }
        },
    )
    return result
