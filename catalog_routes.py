"""
Catalog API Routes

Universities, departments, programs and program requirements. Department
administrators manage programs of their own department; the super admin
manages everything. Catalog changes invalidate every cached match list.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from db import get_session
from models.models import Program
from models.schemas import (
    UniversityCreate, UniversityOut, DepartmentCreate, DepartmentOut,
    ProgramCreate, ProgramOut, RequirementCreate, RequirementUpdate, RequirementOut,
)
from models.schemas_user import CurrentUser
from utils.auth_deps import require_admin, require_super_admin
from utils import crud_catalog
from utils.crud_application import list_applications
from matching.logic.cache import invalidate_all

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalog"])


def _program_out(program: Program) -> ProgramOut:
    department = program.department
    return ProgramOut(
        id=program.id,
        name=program.name,
        department_id=program.department_id,
        department_name=department.name if department else None,
        university_name=department.university.name if department and department.university else None,
        requirements=[RequirementOut.model_validate(r) for r in program.requirements],
        created_at=program.created_at,
    )


def _check_department_access(current: CurrentUser, department_id: str) -> None:
    if current.is_super_admin:
        return
    if current.department_id != department_id:
        raise HTTPException(status_code=403, detail="Not allowed to manage this department")


def _load_program(db: Session, program_id: str) -> Program:
    program = crud_catalog.get_program(db, program_id)
    if not program:
        raise HTTPException(status_code=404, detail="Program not found")
    return program


# --- Universities ---

@router.get("/universities", response_model=list[UniversityOut], summary="List universities")
def list_universities(db: Session = Depends(get_session)):
    return crud_catalog.list_universities(db)


@router.post("/universities", response_model=UniversityOut, status_code=201, summary="Create university")
def create_university(
    payload: UniversityCreate,
    current: CurrentUser = Depends(require_super_admin),
    db: Session = Depends(get_session),
):
    slug = payload.slug or crud_catalog.slugify(payload.name)
    if crud_catalog.get_university_by_slug(db, slug):
        raise HTTPException(status_code=409, detail="University already exists")
    return crud_catalog.create_university(db, name=payload.name, location=payload.location, slug=slug)


# --- Departments ---

@router.get("/departments", response_model=list[DepartmentOut], summary="List departments")
def list_departments(university_id: str | None = None, db: Session = Depends(get_session)):
    return crud_catalog.list_departments(db, university_id)


@router.post("/departments", response_model=DepartmentOut, status_code=201, summary="Create department")
def create_department(
    payload: DepartmentCreate,
    current: CurrentUser = Depends(require_super_admin),
    db: Session = Depends(get_session),
):
    if not crud_catalog.get_university(db, payload.university_id):
        raise HTTPException(status_code=404, detail="University not found")
    return crud_catalog.create_department(
        db, university_id=payload.university_id, name=payload.name, code=payload.code
    )


# --- Programs ---

@router.get("/programs", response_model=list[ProgramOut], summary="List programs")
def list_programs(
    university_id: str | None = None,
    department_id: str | None = None,
    db: Session = Depends(get_session),
):
    programs = crud_catalog.list_programs(db, university_id=university_id, department_id=department_id)
    return [_program_out(p) for p in programs]


@router.get("/programs/{program_id}", response_model=ProgramOut, summary="Get program")
def get_program(program_id: str, db: Session = Depends(get_session)):
    return _program_out(_load_program(db, program_id))


@router.post("/programs", response_model=ProgramOut, status_code=201, summary="Create program")
def create_program(
    payload: ProgramCreate,
    current: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_session),
):
    if not crud_catalog.get_department(db, payload.department_id):
        raise HTTPException(status_code=404, detail="Department not found")
    _check_department_access(current, payload.department_id)

    program = crud_catalog.create_program(db, department_id=payload.department_id, name=payload.name)
    for req in payload.requirements:
        crud_catalog.create_requirement(
            db,
            program_id=program.id,
            type=req.type,
            description=req.description,
            subject=req.subject,
            min_grade=req.min_grade,
        )
    invalidate_all(db)
    db.expire(program)
    logger.info(f"Program created: {program.name} ({len(payload.requirements)} requirements)")
    return _program_out(_load_program(db, program.id))


@router.delete("/programs/{program_id}", status_code=204, summary="Delete program")
def delete_program(
    program_id: str,
    current: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_session),
):
    program = _load_program(db, program_id)
    _check_department_access(current, program.department_id)
    if list_applications(db, program_id=program.id):
        raise HTTPException(status_code=409, detail="Program has applications")
    crud_catalog.delete_program(db, program)
    invalidate_all(db)


# --- Requirements ---

@router.get("/programs/{program_id}/requirements", response_model=list[RequirementOut], summary="List requirements")
def list_requirements(program_id: str, db: Session = Depends(get_session)):
    _load_program(db, program_id)
    return crud_catalog.list_requirements(db, program_id)


@router.post(
    "/programs/{program_id}/requirements",
    response_model=RequirementOut,
    status_code=201,
    summary="Add requirement",
)
def create_requirement(
    program_id: str,
    payload: RequirementCreate,
    current: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_session),
):
    program = _load_program(db, program_id)
    _check_department_access(current, program.department_id)
    requirement = crud_catalog.create_requirement(
        db,
        program_id=program.id,
        type=payload.type,
        description=payload.description,
        subject=payload.subject,
        min_grade=payload.min_grade,
    )
    invalidate_all(db)
    return requirement


@router.patch("/requirements/{requirement_id}", response_model=RequirementOut, summary="Update requirement")
def update_requirement(
    requirement_id: str,
    payload: RequirementUpdate,
    current: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_session),
):
    requirement = crud_catalog.get_requirement(db, requirement_id)
    if not requirement:
        raise HTTPException(status_code=404, detail="Requirement not found")
    _check_department_access(current, requirement.program.department_id)
    requirement = crud_catalog.update_requirement(db, requirement, **payload.model_dump(exclude_unset=True))
    invalidate_all(db)
    return requirement


@router.delete("/requirements/{requirement_id}", status_code=204, summary="Delete requirement")
def delete_requirement(
    requirement_id: str,
    current: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_session),
):
    requirement = crud_catalog.get_requirement(db, requirement_id)
    if not requirement:
        raise HTTPException(status_code=404, detail="Requirement not found")
    _check_department_access(current, requirement.program.department_id)
    crud_catalog.delete_requirement(db, requirement)
    invalidate_all(db)
