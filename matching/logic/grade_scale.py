"""
Grade Scale

Parses free-text grade tokens into comparable values and decides whether a
held grade meets a minimum bar.

Tokens are parsed at the boundary into a tagged value:
- LetterGrade(ordinal) for the WASSCE 9-point scale (A1=9 best .. F9=1 worst)
- NumericScore(value) for GPA, percentages and band scores

Two values are only compared when they carry the same tag. Anything that does
not parse, or a letter grade compared against a number, fails conservatively:
the comparison reports "not meeting the bar" and never raises.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

from .constants import GradeScaleConvention, WASSCE_GRADE_SCALE


_NUMERIC_TOKEN = re.compile(r"^(\d+(?:\.\d+)?|\.\d+)\s*%?$")


@dataclass(frozen=True)
class LetterGrade:
    token: str
    ordinal: int


@dataclass(frozen=True)
class NumericScore:
    value: float


ParsedGrade = Union[LetterGrade, NumericScore]


@dataclass(frozen=True)
class GradeComparison:
    matches: bool
    reason: str


def parse_numeric(token: Optional[str]) -> Optional[NumericScore]:
    """Parse a plain non-negative number (optionally with a trailing %)."""
    if token is None:
        return None
    match = _NUMERIC_TOKEN.match(str(token).strip())
    if not match:
        return None
    return NumericScore(float(match.group(1)))


def parse_letter(token: Optional[str]) -> Optional[LetterGrade]:
    """Parse a WASSCE letter grade, case-insensitively."""
    if token is None:
        return None
    normalized = str(token).strip().upper()
    ordinal = WASSCE_GRADE_SCALE.get(normalized)
    if ordinal is None:
        return None
    return LetterGrade(normalized, ordinal)


def parse_grade(
    token: Optional[str],
    convention: GradeScaleConvention = GradeScaleConvention.WASSCE,
) -> Optional[ParsedGrade]:
    """
    Parse a grade token under the given convention.

    Returns None when the token is not understood; callers treat that as
    "cannot compare".
    """
    if convention == GradeScaleConvention.WASSCE:
        letter = parse_letter(token)
        if letter is not None:
            return letter
    return parse_numeric(token)


def meets_minimum(
    held: Optional[str],
    required: Optional[str],
    convention: GradeScaleConvention = GradeScaleConvention.WASSCE,
) -> GradeComparison:
    """
    Check whether a held grade meets or exceeds a required minimum.

    Args:
        held: Grade token the student holds
        required: Minimum grade token the requirement asks for
        convention: Active grade scale convention

    Returns:
        GradeComparison with the verdict and a human-readable reason
    """
    held_value = parse_grade(held, convention)
    required_value = parse_grade(required, convention)

    if held_value is None or required_value is None:
        return GradeComparison(False, "Cannot compare grades - unknown format")

    if isinstance(held_value, LetterGrade) and isinstance(required_value, LetterGrade):
        ok = held_value.ordinal >= required_value.ordinal
    elif isinstance(held_value, NumericScore) and isinstance(required_value, NumericScore):
        ok = held_value.value >= required_value.value
    else:
        return GradeComparison(False, "Cannot compare grades - different grading scales")

    return GradeComparison(ok, "Meets grade requirement" if ok else "Below required grade")


def meets_minimum_score(held: Optional[str], required: Optional[str]) -> GradeComparison:
    """Compare language-test band scores as plain numbers."""
    held_value = parse_numeric(held)
    required_value = parse_numeric(required)

    if held_value is None or required_value is None:
        return GradeComparison(False, "Cannot compare language scores - unknown format")

    ok = held_value.value >= required_value.value
    return GradeComparison(ok, "Meets language requirement" if ok else "Below required score")
