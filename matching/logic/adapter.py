"""
Data Adapter for the Matching Engine

Reads students, qualifications and the program catalog through the stores in
utils/ and transforms the ORM rows into engine contracts.

This is a pure READ + TRANSFORM layer:
- NO scoring logic
- NO ranking
- NO DB writes
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from models.models import Program, ProgramRequirement, Qualification
from models.models_user import Student
from utils.crud_catalog import list_programs
from utils.crud_qualification import list_qualifications

from .contracts import ProgramCandidate, QualificationRecord, RequirementRecord

logger = logging.getLogger(__name__)


def to_qualification_record(row: Qualification) -> QualificationRecord:
    return QualificationRecord(
        id=row.id,
        type=row.type,
        subject=row.subject,
        grade=row.grade,
        verified=bool(row.verified),
    )


def to_requirement_record(row: ProgramRequirement) -> RequirementRecord:
    return RequirementRecord(
        id=row.id,
        type=row.type,
        subject=row.subject,
        min_grade=row.min_grade,
        description=row.description or "",
    )


def to_program_candidate(program: Program) -> ProgramCandidate:
    department = program.department
    university = department.university if department else None
    return ProgramCandidate(
        program_id=program.id,
        program_name=program.name,
        department_name=department.name if department else "Unknown Department",
        university_name=university.name if university else "Unknown University",
        requirements=[to_requirement_record(r) for r in program.requirements],
    )


def fetch_student(db: Session, student_id: str) -> Optional[Student]:
    return db.get(Student, student_id)


def fetch_verified_qualifications(db: Session, student_id: str) -> List[QualificationRecord]:
    """Only verified qualifications count toward eligibility."""
    records = []
    for row in list_qualifications(db, student_id, verified=True):
        try:
            records.append(to_qualification_record(row))
        except ValueError as e:
            logger.warning(f"Skipping qualification {row.id}: {e}")
    return records


def fetch_program_candidates(db: Session) -> List[ProgramCandidate]:
    """Whole catalog in catalog order (newest first)."""
    candidates = []
    for program in list_programs(db):
        try:
            candidates.append(to_program_candidate(program))
        except ValueError as e:
            # Unknown requirement type stored in the row; skip the program
            logger.warning(f"Skipping program {program.id}: {e}")
    return candidates
