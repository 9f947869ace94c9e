"""
Qualification API Routes

Students record their own qualifications; administrators verify them. Only
verified qualifications count toward program matching, and any edit by the
student sends the qualification back to unverified.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from db import get_session
from models.models import Qualification
from models.schemas import QualificationCreate, QualificationUpdate, QualificationOut
from models.schemas_user import CurrentUser
from matching.logic.constants import QualificationType
from utils.auth_deps import auth_user, require_admin, require_student
from utils import crud_qualification
from matching.logic.cache import invalidate_student

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/qualifications", tags=["qualifications"])


def _load_owned(db: Session, qualification_id: str, current: CurrentUser) -> Qualification:
    qualification = crud_qualification.get_qualification(db, qualification_id)
    if not qualification:
        raise HTTPException(status_code=404, detail="Qualification not found")
    if not current.is_admin and qualification.student_id != current.student_id:
        raise HTTPException(status_code=403, detail="Not allowed to access this qualification")
    return qualification


@router.get("", response_model=list[QualificationOut], summary="List qualifications")
def list_qualifications(
    student_id: str | None = None,
    type: QualificationType | None = None,
    verified: bool | None = None,
    current: CurrentUser = Depends(auth_user),
    db: Session = Depends(get_session),
):
    """Students see their own qualifications; admins may filter by student."""
    if not current.is_admin:
        if not current.student_id:
            raise HTTPException(status_code=403, detail="Student access required")
        student_id = current.student_id
    return crud_qualification.list_qualifications(db, student_id, type=type, verified=verified)


@router.post("", response_model=QualificationOut, status_code=201, summary="Add qualification")
def create_qualification(
    payload: QualificationCreate,
    current: CurrentUser = Depends(require_student),
    db: Session = Depends(get_session),
):
    qualification = crud_qualification.create_qualification(
        db,
        student_id=current.student_id,
        type=payload.type,
        subject=payload.subject,
        grade=payload.grade,
    )
    invalidate_student(db, current.student_id)
    return qualification


@router.patch("/{qualification_id}", response_model=QualificationOut, summary="Update qualification")
def update_qualification(
    qualification_id: str,
    payload: QualificationUpdate,
    current: CurrentUser = Depends(auth_user),
    db: Session = Depends(get_session),
):
    qualification = _load_owned(db, qualification_id, current)
    qualification = crud_qualification.update_qualification(
        db,
        qualification,
        type=payload.type,
        subject=payload.subject,
        grade=payload.grade,
        reset_verification=not current.is_admin,
    )
    invalidate_student(db, qualification.student_id)
    return qualification


@router.post("/{qualification_id}/verify", response_model=QualificationOut, summary="Verify qualification")
def verify_qualification(
    qualification_id: str,
    current: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_session),
):
    qualification = _load_owned(db, qualification_id, current)
    qualification = crud_qualification.verify_qualification(db, qualification)
    invalidate_student(db, qualification.student_id)
    logger.info(f"Qualification {qualification.id} verified by {current.email}")
    return qualification


@router.delete("/{qualification_id}", status_code=204, summary="Delete qualification")
def delete_qualification(
    qualification_id: str,
    current: CurrentUser = Depends(auth_user),
    db: Session = Depends(get_session),
):
    qualification = _load_owned(db, qualification_id, current)
    student_id = qualification.student_id
    crud_qualification.delete_qualification(db, qualification)
    invalidate_student(db, student_id)
