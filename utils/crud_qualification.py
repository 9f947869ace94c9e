from sqlalchemy.orm import Session
from sqlalchemy import select
from models.models import Qualification, QualificationType

def list_qualifications(
    db: Session,
    student_id: str | None = None,
    *,
    type: QualificationType | None = None,
    verified: bool | None = None,
) -> list[Qualification]:
    stmt = select(Qualification)
    if student_id is not None:
        stmt = stmt.where(Qualification.student_id == student_id)
    if type is not None:
        stmt = stmt.where(Qualification.type == QualificationType(type).value)
    if verified is not None:
        stmt = stmt.where(Qualification.verified == verified)
    stmt = stmt.order_by(Qualification.created_at.desc(), Qualification.id)
    return list(db.execute(stmt).scalars())

def get_qualification(db: Session, qualification_id: str) -> Qualification | None:
    return db.get(Qualification, qualification_id)

def create_qualification(db: Session, *, student_id: str, type: QualificationType, subject: str, grade: str) -> Qualification:
    qualification = Qualification(
        student_id=student_id,
        type=QualificationType(type).value,
        subject=subject.strip(),
        grade=grade.strip(),
        verified=False,
    )
    db.add(qualification)
    db.flush()
    return qualification

def update_qualification(
    db: Session,
    qualification: Qualification,
    *,
    type: QualificationType | None = None,
    subject: str | None = None,
    grade: str | None = None,
    reset_verification: bool = True,
) -> Qualification:
    changed = False
    if type is not None and QualificationType(type).value != qualification.type:
        qualification.type = QualificationType(type).value
        changed = True
    if subject is not None and subject.strip() != qualification.subject:
        qualification.subject = subject.strip()
        changed = True
    if grade is not None and grade.strip() != qualification.grade:
        qualification.grade = grade.strip()
        changed = True
    # An edited credential has to be verified again
    if changed and reset_verification:
        qualification.verified = False
    db.flush()
    return qualification

def verify_qualification(db: Session, qualification: Qualification) -> Qualification:
    qualification.verified = True
    db.flush()
    return qualification

def delete_qualification(db: Session, qualification: Qualification) -> None:
    db.delete(qualification)
    db.flush()
