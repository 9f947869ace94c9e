"""
Matching Engine Constants

Defines the enums, grade scales, compatibility table and default thresholds
used by the eligibility matching engine.
"""

from enum import Enum
from typing import Dict, FrozenSet


# =============================================================================
# ENUMS
# =============================================================================

class QualificationType(str, Enum):
    """Kind of credential a student holds."""
    HIGH_SCHOOL = "HIGH_SCHOOL"
    UNDERGRADUATE = "UNDERGRADUATE"
    LANGUAGE_TEST = "LANGUAGE_TEST"
    OTHER = "OTHER"


class RequirementType(str, Enum):
    """Kind of admission criterion a program declares."""
    GRADE = "GRADE"
    COURSE = "COURSE"
    LANGUAGE = "LANGUAGE"
    INTERVIEW = "INTERVIEW"
    PORTFOLIO = "PORTFOLIO"


class RequirementStatus(str, Enum):
    """Outcome of evaluating one requirement against a qualification set."""
    MET = "met"
    PARTIAL = "partial"
    NOT_MET = "not-met"


class GradeScaleConvention(str, Enum):
    """Ordering rule used to compare two grade tokens."""
    WASSCE = "wassce"      # 9-point West-African letter scale plus numeric scores
    NUMERIC = "numeric"    # numeric scores only (GPA, percentage, band)


# =============================================================================
# GRADE SCALES
# =============================================================================

# WASSCE 9-point scale: higher ordinal = better grade
WASSCE_GRADE_SCALE: Dict[str, int] = {
    "A1": 9,   # Excellent
    "B2": 8,   # Very Good
    "B3": 7,   # Good
    "C4": 6,   # Credit
    "C5": 5,   # Credit
    "C6": 4,   # Credit
    "D7": 3,   # Pass
    "E8": 2,   # Pass
    "F9": 1,   # Fail
}

WASSCE_MAX_ORDINAL = max(WASSCE_GRADE_SCALE.values())

# =============================================================================
# REQUIREMENT / QUALIFICATION COMPATIBILITY
# =============================================================================

TYPE_COMPATIBILITY: Dict[RequirementType, FrozenSet[QualificationType]] = {
    RequirementType.GRADE: frozenset({
        QualificationType.HIGH_SCHOOL,
        QualificationType.UNDERGRADUATE,
        QualificationType.OTHER,
    }),
    RequirementType.LANGUAGE: frozenset({QualificationType.LANGUAGE_TEST}),
    RequirementType.COURSE: frozenset({
        QualificationType.UNDERGRADUATE,
        QualificationType.OTHER,
    }),
    RequirementType.INTERVIEW: frozenset(),
    RequirementType.PORTFOLIO: frozenset(),
}

# Satisfied only by an admissions officer, never by comparing qualifications
MANUAL_REVIEW_TYPES: FrozenSet[RequirementType] = frozenset({
    RequirementType.INTERVIEW,
    RequirementType.PORTFOLIO,
})

# =============================================================================
# RANKING / CACHE DEFAULTS
# =============================================================================

DEFAULT_MINIMUM_MATCH_SCORE = 50
DEFAULT_CACHE_TTL_HOURS = 6.0

# =============================================================================
# WEIGHTED FIT ESTIMATE
# =============================================================================

# Weights for the blended fit estimate (normalised by their sum)
DEFAULT_ESTIMATE_WEIGHTS: Dict[str, float] = {
    "grade": 0.5,
    "language": 0.2,
    "extracurricular": 0.15,
    "work_experience": 0.15,
}

LANGUAGE_BAND_MAX = 9.0              # IELTS band ceiling
EXTRACURRICULAR_POINTS_EACH = 20     # capped at 100
WORK_EXPERIENCE_POINTS_PER_YEAR = 25 # capped at 100

ENGINE_VERSION = "1.0.0"
