from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey

from models.models_user import _uuid
from db import Base


class MatchCache(Base):
    __tablename__ = "match_caches"

    id = Column(String(36), primary_key=True, default=_uuid)
    student_id = Column(String(36), ForeignKey("students.id", ondelete="CASCADE"), unique=True, nullable=False)

    # Serialized MatchOutput
    payload = Column(Text, nullable=False)
    expires_at = Column(DateTime, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
