"""
Match Cache

Stores a computed MatchOutput per student with an expiry. Entries are a copy,
never the source of truth: stale or missing entries are recomputed by the
runner on read, and any qualification or catalog change drops them.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..models import MatchCache
from .contracts import MatchOutput

logger = logging.getLogger(__name__)


def load_cached_output(db: Session, student_id: str, now: Optional[datetime] = None) -> Optional[MatchOutput]:
    """Return the cached output for a student, or None when missing or expired."""
    entry = db.execute(select(MatchCache).where(MatchCache.student_id == student_id)).scalar_one_or_none()
    if entry is None:
        return None
    if entry.expires_at <= (now or datetime.utcnow()):
        logger.debug(f"Match cache expired for student {student_id}")
        return None
    try:
        output = MatchOutput.model_validate_json(entry.payload)
    except ValidationError as e:
        logger.warning(f"Discarding unreadable match cache for student {student_id}: {e}")
        return None
    output.cached = True
    return output


def store_output(db: Session, student_id: str, output: MatchOutput, ttl_hours: float) -> MatchCache:
    """Insert or refresh the cache entry for a student."""
    expires_at = datetime.utcnow() + timedelta(hours=ttl_hours)
    payload = output.model_copy(update={"cached": False}).model_dump_json()

    entry = db.execute(select(MatchCache).where(MatchCache.student_id == student_id)).scalar_one_or_none()
    if entry is None:
        entry = MatchCache(student_id=student_id, payload=payload, expires_at=expires_at)
        db.add(entry)
    else:
        entry.payload = payload
        entry.expires_at = expires_at
    db.flush()
    return entry


def invalidate_student(db: Session, student_id: str) -> None:
    db.execute(delete(MatchCache).where(MatchCache.student_id == student_id))


def invalidate_all(db: Session) -> None:
    db.execute(delete(MatchCache))
