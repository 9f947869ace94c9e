"""
Data Contracts for the Matching Engine

Defines Pydantic models for the engine inputs (qualifications, program
requirements) and outputs (per-requirement verdicts and program match results).
These contracts are the API boundary for the matching engine; the ORM layer is
translated into them by the adapter.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from .constants import (
    GradeScaleConvention,
    QualificationType,
    RequirementType,
    RequirementStatus,
    ENGINE_VERSION,
)


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class QualificationRecord(BaseModel):
    """A student-held credential or test result."""
    id: Optional[str] = None
    type: QualificationType
    subject: str
    grade: str
    verified: bool = False


class RequirementRecord(BaseModel):
    """A program's declared admission criterion."""
    id: Optional[str] = None
    type: RequirementType
    subject: Optional[str] = None
    min_grade: Optional[str] = None
    description: str = ""


class ProgramCandidate(BaseModel):
    """A program with its requirement set, ready for evaluation."""
    program_id: str
    program_name: str
    department_name: str = "Unknown Department"
    university_name: str = "Unknown University"
    requirements: List[RequirementRecord] = Field(default_factory=list)


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class RequirementVerdict(BaseModel):
    """Result of comparing one qualification with one requirement."""
    matches: bool
    reason: str


class QualificationMatch(BaseModel):
    """A qualification that satisfied a requirement, and why."""
    qualification_id: Optional[str] = None
    type: QualificationType
    subject: str
    grade: str
    verified: bool
    match_reason: str


class RequirementMatch(BaseModel):
    """Per-requirement breakdown inside a MatchResult."""
    requirement_id: Optional[str] = None
    type: RequirementType
    subject: Optional[str] = None
    min_grade: Optional[str] = None
    description: str = ""
    status: RequirementStatus
    matching_qualifications: List[QualificationMatch] = Field(default_factory=list)


class MatchResult(BaseModel):
    """
    Match of one student against one program.
    Derived on each query; never the source of truth.
    """
    program_id: str
    program_name: str
    department_name: str
    university_name: str
    match_score: int = Field(ge=0, le=100)
    met_requirements: int = Field(ge=0)
    partial_requirements: int = Field(ge=0, default=0)
    total_requirements: int = Field(gt=0)
    requirements: List[RequirementMatch] = Field(default_factory=list)


class MatchOutput(BaseModel):
    """Ranked match list for one student, with pipeline statistics."""
    student_id: Optional[str] = None
    matches: List[MatchResult] = Field(default_factory=list)

    total_programs_evaluated: int = 0
    total_scored: int = 0
    total_matched: int = 0
    minimum_match_score: int = 50
    grade_scale_convention: GradeScaleConvention = GradeScaleConvention.WASSCE
    student_found: bool = True

    computed_at: Optional[datetime] = None
    processing_time_ms: Optional[float] = None
    engine_version: str = ENGINE_VERSION
    cached: bool = False

    warnings: List[str] = Field(default_factory=list)


# =============================================================================
# WEIGHTED FIT ESTIMATE
# =============================================================================

class EstimateProfile(BaseModel):
    """Self-reported profile for the anonymous fit estimate."""
    grade: str = Field(..., description="Best grade on the active scale, e.g. B2")
    english_score: float = Field(0.0, ge=0.0, le=9.0, description="IELTS-style band score")
    extracurriculars: int = Field(0, ge=0)
    work_experience_years: float = Field(0.0, ge=0.0)


class EstimateTarget(BaseModel):
    """Program thresholds used by the fit estimate."""
    program_name: str = ""
    min_grade: str
    min_english: float = Field(0.0, ge=0.0, le=9.0)
    popularity: float = Field(1.0, ge=0.0, le=1.0)


class FitEstimate(BaseModel):
    program_name: str = ""
    estimate: int = Field(ge=0, le=100)
    grade_score: float = 0.0
    language_score: float = 0.0
    extracurricular_score: float = 0.0
    work_experience_score: float = 0.0
