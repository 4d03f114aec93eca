from fastapi import APIRouter, Query

from mapscore.engine.norms import get_reference_tables
from mapscore.engine.norms.tables import normalize_grade, normalize_percentile
from mapscore.engine.projection import grade_equivalent
from mapscore.schemas.projection import (
    GradeEquivalentResponse,
    PercentileLookupResponse,
    ScoreLookupResponse,
)

router = APIRouter(prefix="/norms", tags=["norms"])


@router.get("/percentile", response_model=PercentileLookupResponse)
def percentile_for_score(rit_score: float = Query(...), grade: float = Query(...)) -> PercentileLookupResponse:
    table = get_reference_tables().percentiles
    return PercentileLookupResponse(
        rit_score=rit_score,
        grade=normalize_grade(grade),
        percentile=table.percentile_from_score(rit_score, grade),
    )


@router.get("/score", response_model=ScoreLookupResponse)
def score_for_percentile(percentile: float = Query(...), grade: float = Query(...)) -> ScoreLookupResponse:
    table = get_reference_tables().percentiles
    return ScoreLookupResponse(
        percentile=normalize_percentile(percentile),
        grade=normalize_grade(grade),
        rit_score=table.score_from_percentile(percentile, grade),
    )


@router.get("/grade-equivalent", response_model=GradeEquivalentResponse)
def grade_equivalent_for_score(rit_score: float = Query(...)) -> GradeEquivalentResponse:
    return GradeEquivalentResponse(rit_score=rit_score, grade_equivalent=grade_equivalent(rit_score))
