"""
Matching API Routes

Exposes the eligibility matching engine via REST API:
- GET  /matches                         ranked matches for the calling student
- GET  /matches/students/{student_id}   admin view of a student's matches
- POST /matches/evaluate-requirement    admin debugging of one pair
- POST /matches/estimate                anonymous weighted fit estimate
"""

import logging
from typing import List
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import get_session
from models.schemas_user import CurrentUser
from utils.auth_deps import require_admin, require_student
from .logic.config import MatchingConfig, load_matching_config
from .logic.constants import ENGINE_VERSION
from .logic.contracts import (
    QualificationRecord,
    RequirementRecord,
    RequirementVerdict,
    MatchOutput,
    EstimateProfile,
    EstimateTarget,
    FitEstimate,
)
from .logic.requirement_matcher import evaluate_requirement
from .logic.quick_match import estimate_fit
from .logic.runner import get_matches_cached, MatchingUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matches", tags=["matches"])


def get_matching_config() -> MatchingConfig:
    return load_matching_config()


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class EvaluateRequirementRequest(BaseModel):
    """Request body for the single-pair evaluation endpoint."""
    qualification: QualificationRecord
    requirement: RequirementRecord


class EstimateRequest(BaseModel):
    profile: EstimateProfile
    programs: List[EstimateTarget] = Field(..., min_length=1, max_length=100)


def _unavailable() -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": "Unable to compute matches right now"})


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("", response_model=MatchOutput, summary="Matches for the current student")
def get_my_matches(
    current: CurrentUser = Depends(require_student),
    config: MatchingConfig = Depends(get_matching_config),
    db: Session = Depends(get_session),
):
    """
    Rank every program in the catalog against the student's verified
    qualifications.

    **Response:**
    - Programs at or above the minimum match score, best first
    - Per-requirement breakdown (met / partial / not-met) with the
      qualifications that satisfied each requirement
    """
    try:
        return get_matches_cached(db, current.student_id, config)
    except MatchingUnavailableError:
        return _unavailable()


@router.get("/students/{student_id}", response_model=MatchOutput, summary="Matches for a student (admin)")
def get_student_matches(
    student_id: str,
    current: CurrentUser = Depends(require_admin),
    config: MatchingConfig = Depends(get_matching_config),
    db: Session = Depends(get_session),
):
    try:
        return get_matches_cached(db, student_id, config)
    except MatchingUnavailableError:
        return _unavailable()


@router.post("/evaluate-requirement", response_model=RequirementVerdict, summary="Evaluate one qualification")
def evaluate_single_requirement(
    request: EvaluateRequirementRequest,
    current: CurrentUser = Depends(require_admin),
    config: MatchingConfig = Depends(get_matching_config),
):
    return evaluate_requirement(request.qualification, request.requirement, config.grade_scale_convention)


@router.post("/estimate", response_model=List[FitEstimate], summary="Weighted fit estimate")
def estimate(
    request: EstimateRequest,
    config: MatchingConfig = Depends(get_matching_config),
):
    """
    Informational fit estimate from a self-reported profile. Not used for
    eligibility ranking.
    """
    return [
        estimate_fit(request.profile, target, config.weights, config.grade_scale_convention)
        for target in request.programs
    ]


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Matching engine health check")
def health_check():
    """Check if matching engine is operational."""
    return {"status": "ok", "engine": "matching", "version": ENGINE_VERSION}
