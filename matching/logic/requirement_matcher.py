"""
Requirement Matcher

Decides whether a single qualification satisfies a single program requirement.
Pure function over its two inputs.
"""

from typing import Optional

from .contracts import QualificationRecord, RequirementRecord, RequirementVerdict
from .constants import (
    GradeScaleConvention,
    RequirementType,
    TYPE_COMPATIBILITY,
    MANUAL_REVIEW_TYPES,
)
from .grade_scale import meets_minimum, meets_minimum_score


_SUCCESS_REASONS = {
    RequirementType.GRADE: "Meets grade requirement",
    RequirementType.LANGUAGE: "Meets language requirement",
    RequirementType.COURSE: "Meets course requirement",
}


def normalize_subject(subject: Optional[str]) -> str:
    """Case-insensitive, whitespace-collapsed form used for subject equality."""
    return " ".join((subject or "").split()).casefold()


def subjects_match(a: Optional[str], b: Optional[str]) -> bool:
    return normalize_subject(a) == normalize_subject(b)


def is_type_compatible(qualification: QualificationRecord, requirement: RequirementRecord) -> bool:
    return qualification.type in TYPE_COMPATIBILITY[requirement.type]


def evaluate_requirement(
    qualification: QualificationRecord,
    requirement: RequirementRecord,
    convention: GradeScaleConvention = GradeScaleConvention.WASSCE,
) -> RequirementVerdict:
    """
    Evaluate one qualification against one requirement.

    Steps:
    1. Type compatibility (INTERVIEW and PORTFOLIO accept nothing)
    2. Subject equality, when the requirement names a subject
    3. Threshold comparison, when the requirement sets a minimum

    Args:
        qualification: The student's qualification
        requirement: The program requirement
        convention: Grade scale used for GRADE/COURSE thresholds

    Returns:
        RequirementVerdict(matches, reason)
    """
    if requirement.type in MANUAL_REVIEW_TYPES:
        return RequirementVerdict(
            matches=False,
            reason=f"Requirement type {requirement.type.value} requires manual verification",
        )

    if not is_type_compatible(qualification, requirement):
        return RequirementVerdict(
            matches=False,
            reason="Qualification type not compatible with requirement type",
        )

    if requirement.subject and not subjects_match(qualification.subject, requirement.subject):
        return RequirementVerdict(
            matches=False,
            reason=f"Subject mismatch: {qualification.subject} vs {requirement.subject}",
        )

    if requirement.min_grade:
        if requirement.type == RequirementType.LANGUAGE:
            comparison = meets_minimum_score(qualification.grade, requirement.min_grade)
            too_low = f"Language score too low: {qualification.grade} < {requirement.min_grade}"
        else:
            comparison = meets_minimum(qualification.grade, requirement.min_grade, convention)
            too_low = f"Grade too low: {qualification.grade} < {requirement.min_grade}"

        if not comparison.matches:
            # Unparseable tokens keep their own explanation
            reason = too_low if comparison.reason.startswith("Below") else comparison.reason
            return RequirementVerdict(matches=False, reason=reason)

    return RequirementVerdict(matches=True, reason=_SUCCESS_REASONS[requirement.type])
