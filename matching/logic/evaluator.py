"""
Program Evaluator

Evaluates a student's full qualification set against one program's requirement
set and produces a MatchResult with a per-requirement breakdown.
"""

from typing import List, Optional, Sequence

from .contracts import (
    ProgramCandidate,
    QualificationRecord,
    RequirementRecord,
    RequirementMatch,
    QualificationMatch,
    MatchResult,
)
from .constants import (
    GradeScaleConvention,
    QualificationType,
    RequirementType,
    RequirementStatus,
)
from .requirement_matcher import evaluate_requirement, subjects_match


def compute_match_score(met: int, total: int) -> int:
    """Percentage of requirements met, rounded half-up to an integer in [0, 100]."""
    if total <= 0:
        raise ValueError("total must be positive")
    return (200 * met + total) // (2 * total)


def partial_status(
    requirement: RequirementRecord,
    qualifications: Sequence[QualificationRecord],
) -> RequirementStatus:
    """
    Partial-credit heuristic for a requirement no qualification fully matched.

    - LANGUAGE: partial if any language test is held, whatever its score
    - GRADE with a subject: partial if a non-language qualification in that
      subject is held, whatever its grade
    """
    if requirement.type == RequirementType.LANGUAGE:
        if any(q.type == QualificationType.LANGUAGE_TEST for q in qualifications):
            return RequirementStatus.PARTIAL
        return RequirementStatus.NOT_MET

    if requirement.type == RequirementType.GRADE and requirement.subject:
        if any(
            q.type != QualificationType.LANGUAGE_TEST and subjects_match(q.subject, requirement.subject)
            for q in qualifications
        ):
            return RequirementStatus.PARTIAL

    return RequirementStatus.NOT_MET


def check_requirement(
    requirement: RequirementRecord,
    qualifications: Sequence[QualificationRecord],
    convention: GradeScaleConvention = GradeScaleConvention.WASSCE,
) -> RequirementMatch:
    """Check one requirement against every qualification."""
    matching: List[QualificationMatch] = []

    for qualification in qualifications:
        verdict = evaluate_requirement(qualification, requirement, convention)
        if verdict.matches:
            matching.append(QualificationMatch(
                qualification_id=qualification.id,
                type=qualification.type,
                subject=qualification.subject,
                grade=qualification.grade,
                verified=qualification.verified,
                match_reason=verdict.reason,
            ))

    status = RequirementStatus.MET if matching else partial_status(requirement, qualifications)

    return RequirementMatch(
        requirement_id=requirement.id,
        type=requirement.type,
        subject=requirement.subject,
        min_grade=requirement.min_grade,
        description=requirement.description,
        status=status,
        matching_qualifications=matching,
    )


def evaluate_program(
    program: ProgramCandidate,
    qualifications: Sequence[QualificationRecord],
    convention: GradeScaleConvention = GradeScaleConvention.WASSCE,
) -> Optional[MatchResult]:
    """
    Score a program for a student.

    Args:
        program: Program with its requirements
        qualifications: The student's qualifications (verified ones only)
        convention: Active grade scale convention

    Returns:
        MatchResult, or None for a program without requirements (it cannot be
        scored and is left out of results)
    """
    if not program.requirements:
        return None

    breakdown = [check_requirement(r, qualifications, convention) for r in program.requirements]

    met = sum(1 for r in breakdown if r.status == RequirementStatus.MET)
    partial = sum(1 for r in breakdown if r.status == RequirementStatus.PARTIAL)
    total = len(breakdown)

    return MatchResult(
        program_id=program.program_id,
        program_name=program.program_name,
        department_name=program.department_name,
        university_name=program.university_name,
        match_score=compute_match_score(met, total),
        met_requirements=met,
        partial_requirements=partial,
        total_requirements=total,
        requirements=breakdown,
    )


def batch_evaluate(
    programs: Sequence[ProgramCandidate],
    qualifications: Sequence[QualificationRecord],
    convention: GradeScaleConvention = GradeScaleConvention.WASSCE,
) -> List[MatchResult]:
    """Evaluate every program, dropping the ones that cannot be scored."""
    results = []
    for program in programs:
        result = evaluate_program(program, qualifications, convention)
        if result is not None:
            results.append(result)
    return results
