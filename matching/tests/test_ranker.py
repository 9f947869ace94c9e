"""
Tests for cutoff filtering and ranking.
"""

from matching.logic.contracts import MatchResult
from matching.logic.ranker import rank_matches, filter_by_minimum


def result(program_id, score):
    return MatchResult(
        program_id=program_id,
        program_name=program_id,
        department_name="Dept",
        university_name="Uni",
        match_score=score,
        met_requirements=0,
        total_requirements=1,
    )


def test_cutoff_is_inclusive():
    kept = filter_by_minimum([result("a", 49), result("b", 50), result("c", 51)])
    assert [r.program_id for r in kept] == ["b", "c"]


def test_ranked_by_score_descending():
    ranked = rank_matches([result("a", 60), result("b", 100), result("c", 75)])
    assert [r.match_score for r in ranked] == [100, 75, 60]


def test_ties_keep_catalog_order():
    ranked = rank_matches([result("a", 80), result("b", 100), result("c", 80), result("d", 80)])
    assert [r.program_id for r in ranked] == ["b", "a", "c", "d"]


def test_custom_minimum():
    ranked = rank_matches([result("a", 60), result("b", 90)], minimum_match_score=75)
    assert [r.program_id for r in ranked] == ["b"]


def test_ranking_is_repeatable():
    results = [result(str(i), score) for i, score in enumerate([50, 67, 50, 100, 67])]
    assert rank_matches(results) == rank_matches(results)
