"""
Weighted Fit Estimate

Anonymous, self-reported estimate of how well a profile fits a program's
published thresholds. Blends grade, English, extracurricular and work
experience sub-scores with configurable weights and scales the result by the
program's popularity factor.

This estimate is informational only; eligibility ranking always uses the
per-requirement evaluator.
"""

from .config import MatchingWeights
from .contracts import EstimateProfile, EstimateTarget, FitEstimate
from .constants import (
    GradeScaleConvention,
    WASSCE_MAX_ORDINAL,
    LANGUAGE_BAND_MAX,
    EXTRACURRICULAR_POINTS_EACH,
    WORK_EXPERIENCE_POINTS_PER_YEAR,
)
from .grade_scale import LetterGrade, parse_grade, meets_minimum


def _grade_subscore(profile: EstimateProfile, target: EstimateTarget, convention: GradeScaleConvention) -> float:
    if not meets_minimum(profile.grade, target.min_grade, convention).matches:
        return 0.0
    parsed = parse_grade(profile.grade, convention)
    if isinstance(parsed, LetterGrade):
        return parsed.ordinal / WASSCE_MAX_ORDINAL * 100
    # Numeric grades are read as percentages
    return min(parsed.value, 100.0)


def _language_subscore(profile: EstimateProfile, target: EstimateTarget) -> float:
    if profile.english_score < target.min_english:
        return 0.0
    return profile.english_score / LANGUAGE_BAND_MAX * 100


def estimate_fit(
    profile: EstimateProfile,
    target: EstimateTarget,
    weights: MatchingWeights,
    convention: GradeScaleConvention = GradeScaleConvention.WASSCE,
) -> FitEstimate:
    """
    Compute the weighted fit estimate for one program.

    estimate = clamp((sum(subscore * weight) / sum(weight)) * popularity, 0, 100)
    """
    grade = _grade_subscore(profile, target, convention)
    language = _language_subscore(profile, target)
    extracurricular = min(profile.extracurriculars * EXTRACURRICULAR_POINTS_EACH, 100)
    work_experience = min(profile.work_experience_years * WORK_EXPERIENCE_POINTS_PER_YEAR, 100)

    total_weight = weights.total
    if total_weight <= 0:
        blended = 0.0
    else:
        blended = (
            grade * weights.grade
            + language * weights.language
            + extracurricular * weights.extracurricular
            + work_experience * weights.work_experience
        ) / total_weight

    final = min(max(blended * target.popularity, 0.0), 100.0)

    return FitEstimate(
        program_name=target.program_name,
        estimate=int(final + 0.5),
        grade_score=round(grade, 2),
        language_score=round(language, 2),
        extracurricular_score=round(float(extracurricular), 2),
        work_experience_score=round(float(work_experience), 2),
    )
