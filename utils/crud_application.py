from datetime import datetime
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import select
from models.models import Application, ApplicationStatus, Program, Department

def list_applications(
    db: Session,
    *,
    student_id: str | None = None,
    program_id: str | None = None,
    department_id: str | None = None,
    status: ApplicationStatus | None = None,
) -> list[Application]:
    stmt = select(Application).options(
        joinedload(Application.program).joinedload(Program.department).joinedload(Department.university)
    )
    if student_id:
        stmt = stmt.where(Application.student_id == student_id)
    if program_id:
        stmt = stmt.where(Application.program_id == program_id)
    if department_id:
        stmt = stmt.join(Application.program).where(Program.department_id == department_id)
    if status:
        stmt = stmt.where(Application.status == ApplicationStatus(status).value)
    stmt = stmt.order_by(Application.created_at.desc(), Application.id)
    return list(db.execute(stmt).unique().scalars())

def get_application(db: Session, application_id: str) -> Application | None:
    return db.get(Application, application_id)

def find_application(db: Session, student_id: str, program_id: str) -> Application | None:
    stmt = select(Application).where(
        Application.student_id == student_id,
        Application.program_id == program_id,
    )
    return db.execute(stmt).scalar_one_or_none()

def create_application(db: Session, *, student_id: str, program_id: str) -> Application:
    application = Application(
        student_id=student_id,
        program_id=program_id,
        status=ApplicationStatus.PENDING.value,
        submitted_at=datetime.utcnow(),
    )
    db.add(application)
    db.flush()
    return application

def update_application_status(db: Session, application: Application, status: ApplicationStatus) -> Application:
    application.status = ApplicationStatus(status).value
    db.flush()
    return application
