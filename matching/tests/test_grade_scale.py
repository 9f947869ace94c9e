"""
Tests for grade token parsing and threshold comparison.
"""

from matching.logic.constants import GradeScaleConvention
from matching.logic.grade_scale import (
    LetterGrade,
    NumericScore,
    parse_grade,
    meets_minimum,
    meets_minimum_score,
)


def test_parse_letter_grades_case_insensitive():
    assert parse_grade("A1") == LetterGrade("A1", 9)
    assert parse_grade(" b3 ") == LetterGrade("B3", 7)
    assert parse_grade("f9") == LetterGrade("F9", 1)


def test_parse_numeric_scores():
    assert parse_grade("3.5") == NumericScore(3.5)
    assert parse_grade("75%") == NumericScore(75.0)
    assert parse_grade(".5") == NumericScore(0.5)


def test_parse_unknown_tokens():
    assert parse_grade("Distinction") is None
    assert parse_grade("") is None
    assert parse_grade(None) is None
    assert parse_grade("-3") is None


def test_numeric_convention_rejects_letters():
    assert parse_grade("A1", GradeScaleConvention.NUMERIC) is None
    assert parse_grade("4.0", GradeScaleConvention.NUMERIC) == NumericScore(4.0)


def test_higher_letter_meets_lower_minimum():
    """A1 is the best grade on the 9-point scale."""
    assert meets_minimum("B2", "B3").matches
    assert meets_minimum("A1", "C6").matches
    assert meets_minimum("C6", "C6").matches


def test_lower_letter_fails_minimum():
    result = meets_minimum("D7", "C6")
    assert not result.matches
    assert result.reason == "Below required grade"


def test_numeric_comparison():
    assert meets_minimum("3.5", "3.0").matches
    assert not meets_minimum("2.9", "3.0").matches


def test_unparseable_grade_fails_conservatively():
    result = meets_minimum("Pass", "C6")
    assert not result.matches
    assert result.reason == "Cannot compare grades - unknown format"

    assert not meets_minimum(None, "C6").matches


def test_mixed_scales_fail_conservatively():
    result = meets_minimum("B2", "3.0")
    assert not result.matches
    assert result.reason == "Cannot compare grades - different grading scales"


def test_language_scores_compare_numerically():
    assert meets_minimum_score("7.0", "6.5").matches
    assert meets_minimum_score("6.5", "6.5").matches

    low = meets_minimum_score("6.0", "6.5")
    assert not low.matches
    assert low.reason == "Below required score"


def test_language_score_rejects_letters():
    result = meets_minimum_score("B2", "6.5")
    assert not result.matches
    assert result.reason == "Cannot compare language scores - unknown format"
