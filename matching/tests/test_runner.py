"""
Tests for the matching pipeline against a SQLite store.
"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import SQLAlchemyError

from matching.logic import runner
from matching.logic.cache import load_cached_output, invalidate_student, invalidate_all
from matching.logic.config import MatchingConfig
from matching.logic.constants import GradeScaleConvention, RequirementStatus
from matching.logic.runner import (
    MatchingUnavailableError,
    run_matching,
    match_programs_for_student,
    get_matches_cached,
)


def test_unknown_student_gets_empty_list(db, config, catalog, make_program):
    make_program("BSc Mathematics", [("GRADE", "Mathematics", "C6")])

    output = run_matching(db, "no-such-student", config)

    assert output.matches == []
    assert output.warnings == ["No student record found."]
    assert not output.student_found
    assert match_programs_for_student(db, "no-such-student", config) == []


def test_met_requirement_ranks_program(db, config, student, make_program, make_qualification):
    program = make_program("BSc Computer Science", [("GRADE", "Mathematics", "B3")])
    make_qualification("HIGH_SCHOOL", "Mathematics", "B2")

    output = run_matching(db, student.id, config)

    assert output.total_programs_evaluated == 1
    assert output.total_matched == 1
    match = output.matches[0]
    assert match.program_id == program.id
    assert match.match_score == 100
    assert match.department_name == "Computer Science"
    assert match.university_name == "University of Ghana"
    assert match.requirements[0].status == RequirementStatus.MET


def test_unverified_qualifications_do_not_count(db, config, student, make_program, make_qualification):
    make_program("BSc Computer Science", [("GRADE", "Mathematics", "B3")])
    make_qualification("HIGH_SCHOOL", "Mathematics", "A1", verified=False)

    output = run_matching(db, student.id, config)

    assert output.matches == []
    assert output.total_scored == 1
    assert "No verified qualifications on record." in output.warnings


def test_programs_without_requirements_are_excluded(db, config, student, make_program, make_qualification):
    make_program("Open Studies", [])
    make_program("BSc Computer Science", [("GRADE", "Mathematics", "B3")])
    make_qualification("HIGH_SCHOOL", "Mathematics", "B2")

    output = run_matching(db, student.id, config)

    assert output.total_programs_evaluated == 2
    assert output.total_scored == 1
    assert [m.program_name for m in output.matches] == ["BSc Computer Science"]


def test_results_filtered_and_ranked(db, config, student, make_program, make_qualification):
    make_program("Half", [("GRADE", "Mathematics", "B3"), ("GRADE", "Physics", "B3")])
    make_program("None", [("GRADE", "Physics", "B3")])
    make_program("Full", [("GRADE", "Mathematics", "B3"), ("LANGUAGE", "IELTS", "6.5")])
    make_qualification("HIGH_SCHOOL", "Mathematics", "B2")
    make_qualification("LANGUAGE_TEST", "IELTS", "7.0")

    matches = match_programs_for_student(db, student.id, config)

    assert [(m.program_name, m.match_score) for m in matches] == [("Full", 100), ("Half", 50)]


def test_repeated_runs_are_identical(db, config, student, make_program, make_qualification):
    make_program("A", [("GRADE", "Mathematics", "B3"), ("GRADE", "English", "C6")])
    make_program("B", [("GRADE", "Mathematics", "B3")])
    make_program("C", [("GRADE", "English", "C6"), ("INTERVIEW", None, None)])
    make_qualification("HIGH_SCHOOL", "Mathematics", "B2")
    make_qualification("HIGH_SCHOOL", "English", "C4")

    first = [m.model_dump() for m in match_programs_for_student(db, student.id, config)]
    second = [m.model_dump() for m in match_programs_for_student(db, student.id, config)]

    assert first == second


def test_store_failure_raises_unavailable(db, config, student, monkeypatch):
    def broken(db):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(runner, "fetch_program_candidates", broken)

    with pytest.raises(MatchingUnavailableError):
        run_matching(db, student.id, config)


def test_cache_serves_and_invalidates(db, student, make_program, make_qualification):
    config = MatchingConfig(cache_ttl_hours=6)
    make_program("BSc Computer Science", [("GRADE", "Mathematics", "B3")])
    make_qualification("HIGH_SCHOOL", "Mathematics", "B2")

    first = get_matches_cached(db, student.id, config)
    second = get_matches_cached(db, student.id, config)

    assert not first.cached
    assert second.cached
    assert [m.model_dump() for m in second.matches] == [m.model_dump() for m in first.matches]

    invalidate_student(db, student.id)
    assert not get_matches_cached(db, student.id, config).cached

    invalidate_all(db)
    assert load_cached_output(db, student.id) is None


def test_expired_cache_is_ignored(db, student, make_program):
    make_program("BSc Computer Science", [("GRADE", "Mathematics", "B3")])
    get_matches_cached(db, student.id, MatchingConfig(cache_ttl_hours=1))

    assert load_cached_output(db, student.id) is not None
    assert load_cached_output(db, student.id, now=datetime.utcnow() + timedelta(hours=2)) is None


def test_unknown_student_is_not_cached(db, catalog):
    config = MatchingConfig(cache_ttl_hours=6)
    get_matches_cached(db, "no-such-student", config)
    assert load_cached_output(db, "no-such-student") is None


def test_cache_write_failure_still_returns_matches(db, student, make_program, make_qualification, monkeypatch):
    make_program("BSc Computer Science", [("GRADE", "Mathematics", "B3")])
    make_qualification("HIGH_SCHOOL", "Mathematics", "B2")

    def failing_store(*args, **kwargs):
        raise SQLAlchemyError("UNIQUE constraint failed: match_caches.student_id")

    monkeypatch.setattr(runner, "store_output", failing_store)

    output = get_matches_cached(db, student.id, MatchingConfig(cache_ttl_hours=6))

    assert [m.match_score for m in output.matches] == [100]
    assert not output.cached
    # Session is still usable after the failed write
    assert load_cached_output(db, student.id) is None


def test_cache_recomputed_when_grade_scale_changes(db, student, make_program, make_qualification):
    make_program("BSc Computer Science", [("GRADE", "Mathematics", "B3")])
    make_qualification("HIGH_SCHOOL", "Mathematics", "B2")

    wassce = get_matches_cached(db, student.id, MatchingConfig(cache_ttl_hours=6))
    assert [m.match_score for m in wassce.matches] == [100]

    numeric = get_matches_cached(
        db, student.id, MatchingConfig(cache_ttl_hours=6, grade_scale_convention="numeric")
    )
    assert not numeric.cached
    assert numeric.matches == []
    assert numeric.grade_scale_convention == GradeScaleConvention.NUMERIC
