"""
Matching Runner

Orchestrates the matching pipeline for one student:
1. Resolves the student
2. Fetches verified qualifications and the program catalog via the adapter
3. Evaluates every program
4. Filters and ranks by match score

This is a pure orchestration layer - NO scoring rules, NO SQL.
"""

import logging
import time
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .adapter import fetch_student, fetch_verified_qualifications, fetch_program_candidates
from .cache import load_cached_output, store_output
from .config import MatchingConfig
from .contracts import MatchOutput, MatchResult
from .evaluator import batch_evaluate
from .ranker import rank_matches

logger = logging.getLogger(__name__)


class MatchingUnavailableError(RuntimeError):
    """Matches could not be computed because a collaborator (the store) failed."""


def run_matching(
    db: Session,
    student_id: str,
    config: Optional[MatchingConfig] = None,
) -> MatchOutput:
    """
    Main entry point: run the full matching pipeline.

    Args:
        db: Database session
        student_id: Student to match
        config: Matching configuration (defaults when omitted)

    Returns:
        MatchOutput with the ranked, filtered match list. An unknown student
        yields an empty output, not an error.

    Raises:
        MatchingUnavailableError: the store could not be read
    """
    config = config or MatchingConfig()
    start_time = time.perf_counter()

    logger.info(f"🚀 Starting matching pipeline for student: {student_id}")

    try:
        student = fetch_student(db, student_id)
        if student is None:
            logger.warning(f"⚠️ No student record found for id: {student_id}")
            return MatchOutput(
                student_id=student_id,
                minimum_match_score=config.minimum_match_score,
                grade_scale_convention=config.grade_scale_convention,
                student_found=False,
                computed_at=datetime.utcnow(),
                warnings=["No student record found."],
            )

        qualifications = fetch_verified_qualifications(db, student_id)
        programs = fetch_program_candidates(db)
    except SQLAlchemyError as e:
        logger.error(f"Store unavailable while matching student {student_id}", exc_info=True)
        raise MatchingUnavailableError("Unable to compute matches right now") from e

    logger.info(f"📦 Verified qualifications: {len(qualifications)}, programs in catalog: {len(programs)}")

    scored = batch_evaluate(programs, qualifications, config.grade_scale_convention)
    logger.info(f"📊 Programs scored: {len(scored)} (skipped {len(programs) - len(scored)} without requirements)")

    ranked = rank_matches(scored, config.minimum_match_score)
    logger.info(f"🏆 Programs at or above {config.minimum_match_score}%: {len(ranked)}")

    warnings = []
    if not qualifications:
        warnings.append("No verified qualifications on record.")

    processing_time = (time.perf_counter() - start_time) * 1000

    return MatchOutput(
        student_id=student_id,
        matches=ranked,
        total_programs_evaluated=len(programs),
        total_scored=len(scored),
        total_matched=len(ranked),
        minimum_match_score=config.minimum_match_score,
        grade_scale_convention=config.grade_scale_convention,
        computed_at=datetime.utcnow(),
        processing_time_ms=round(processing_time, 2),
        warnings=warnings,
    )


def match_programs_for_student(
    db: Session,
    student_id: str,
    config: Optional[MatchingConfig] = None,
) -> List[MatchResult]:
    """Ranked, filtered match list for a student."""
    return run_matching(db, student_id, config).matches


def get_matches_cached(
    db: Session,
    student_id: str,
    config: Optional[MatchingConfig] = None,
) -> MatchOutput:
    """
    Serve a student's matches from the cache, recomputing when stale.

    A TTL of zero disables caching. Unknown students are never cached.
    """
    config = config or MatchingConfig()
    if config.cache_ttl_hours <= 0:
        return run_matching(db, student_id, config)

    try:
        cached = load_cached_output(db, student_id)
    except SQLAlchemyError as e:
        logger.error(f"Match cache unavailable for student {student_id}", exc_info=True)
        raise MatchingUnavailableError("Unable to compute matches right now") from e

    if (
        cached is not None
        and cached.minimum_match_score == config.minimum_match_score
        and cached.grade_scale_convention == config.grade_scale_convention
    ):
        logger.info(f"♻️ Serving cached matches for student {student_id}")
        return cached

    output = run_matching(db, student_id, config)
    if not output.student_found:
        return output

    # Savepoint keeps the request transaction usable if the cache write fails
    try:
        with db.begin_nested():
            store_output(db, student_id, output, config.cache_ttl_hours)
    except SQLAlchemyError:
        logger.warning(f"Could not cache matches for student {student_id}", exc_info=True)
    return output
