from fastapi import APIRouter

from mapscore.engine.projection import hours_to_target
from mapscore.schemas.projection import (
    HoursToTargetRequest,
    HoursToTargetResponse,
    ProjectionRequest,
    ProjectionResponse,
)
from mapscore.services.projections import build_student_projection, complete_score

router = APIRouter(prefix="/projections", tags=["projections"])


@router.post("", response_model=ProjectionResponse)
def project_student(payload: ProjectionRequest) -> ProjectionResponse:
    score = complete_score(payload.grade, rit_score=payload.rit_score, percentile=payload.percentile)
    return ProjectionResponse.model_validate(build_student_projection(score).as_dict())


@router.post("/hours", response_model=HoursToTargetResponse)
def hours_for_target(payload: HoursToTargetRequest) -> HoursToTargetResponse:
    return HoursToTargetResponse(hours=hours_to_target(payload.current_score, payload.target_score))
