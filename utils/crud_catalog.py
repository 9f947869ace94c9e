import re
from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy import select
from models.models import University, Department, Program, ProgramRequirement, RequirementType

def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "university"

# --- Universities ---

def list_universities(db: Session) -> list[University]:
    return list(db.execute(select(University).order_by(University.name)).scalars())

def get_university(db: Session, university_id: str) -> University | None:
    return db.get(University, university_id)

def get_university_by_slug(db: Session, slug: str) -> University | None:
    return db.execute(select(University).where(University.slug == slug)).scalar_one_or_none()

def create_university(db: Session, *, name: str, location: str, slug: str | None = None) -> University:
    university = University(name=name, location=location, slug=slug or slugify(name))
    db.add(university)
    db.flush()
    return university

# --- Departments ---

def list_departments(db: Session, university_id: str | None = None) -> list[Department]:
    stmt = select(Department).options(joinedload(Department.university))
    if university_id:
        stmt = stmt.where(Department.university_id == university_id)
    return list(db.execute(stmt.order_by(Department.name)).scalars())

def get_department(db: Session, department_id: str) -> Department | None:
    return db.get(Department, department_id)

def create_department(db: Session, *, university_id: str, name: str, code: str) -> Department:
    department = Department(university_id=university_id, name=name, code=code.upper())
    db.add(department)
    db.flush()
    return department

# --- Programs ---

def list_programs(
    db: Session,
    university_id: str | None = None,
    department_id: str | None = None,
) -> list[Program]:
    """Programs with department, university and requirements preloaded, newest first."""
    stmt = select(Program).options(
        joinedload(Program.department).joinedload(Department.university),
        selectinload(Program.requirements),
    )
    if department_id:
        stmt = stmt.where(Program.department_id == department_id)
    if university_id:
        stmt = stmt.join(Program.department).where(Department.university_id == university_id)
    stmt = stmt.order_by(Program.created_at.desc(), Program.id)
    return list(db.execute(stmt).unique().scalars())

def get_program(db: Session, program_id: str) -> Program | None:
    stmt = select(Program).where(Program.id == program_id).options(
        joinedload(Program.department).joinedload(Department.university),
        selectinload(Program.requirements),
    )
    return db.execute(stmt).unique().scalar_one_or_none()

def create_program(db: Session, *, department_id: str, name: str) -> Program:
    program = Program(department_id=department_id, name=name)
    db.add(program)
    db.flush()
    return program

def delete_program(db: Session, program: Program) -> None:
    db.delete(program)
    db.flush()

# --- Requirements ---

def list_requirements(db: Session, program_id: str) -> list[ProgramRequirement]:
    stmt = (
        select(ProgramRequirement)
        .where(ProgramRequirement.program_id == program_id)
        .order_by(ProgramRequirement.created_at, ProgramRequirement.id)
    )
    return list(db.execute(stmt).scalars())

def get_requirement(db: Session, requirement_id: str) -> ProgramRequirement | None:
    return db.get(ProgramRequirement, requirement_id)

def create_requirement(
    db: Session,
    *,
    program_id: str,
    type: RequirementType,
    description: str,
    subject: str | None = None,
    min_grade: str | None = None,
) -> ProgramRequirement:
    requirement = ProgramRequirement(
        program_id=program_id,
        type=RequirementType(type).value,
        subject=(subject or "").strip() or None,
        min_grade=(min_grade or "").strip() or None,
        description=description,
    )
    db.add(requirement)
    db.flush()
    return requirement

def update_requirement(db: Session, requirement: ProgramRequirement, **changes) -> ProgramRequirement:
    if changes.get("type") is not None:
        requirement.type = RequirementType(changes["type"]).value
    if "subject" in changes:
        requirement.subject = (changes["subject"] or "").strip() or None
    if "min_grade" in changes:
        requirement.min_grade = (changes["min_grade"] or "").strip() or None
    if changes.get("description") is not None:
        requirement.description = changes["description"]
    db.flush()
    return requirement

def delete_requirement(db: Session, requirement: ProgramRequirement) -> None:
    db.delete(requirement)
    db.flush()
