"""
Application API Routes

Students apply to a program once; administrators review applications to the
programs they manage.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from db import get_session
from models.models import Application, ApplicationStatus
from models.schemas import ApplicationCreate, ApplicationStatusUpdate, ApplicationOut
from models.schemas_user import CurrentUser
from utils.auth_deps import auth_user, require_admin, require_student
from utils import crud_application
from utils.crud_catalog import get_program

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])


def _application_out(application: Application) -> ApplicationOut:
    return ApplicationOut(
        id=application.id,
        student_id=application.student_id,
        program_id=application.program_id,
        program_name=application.program.name if application.program else None,
        status=application.status,
        submitted_at=application.submitted_at,
        created_at=application.created_at,
    )


@router.get("", response_model=list[ApplicationOut], summary="List applications")
def list_applications(
    status: ApplicationStatus | None = None,
    current: CurrentUser = Depends(auth_user),
    db: Session = Depends(get_session),
):
    """Students see their own; department admins see their department; super admin sees all."""
    if current.is_super_admin:
        rows = crud_application.list_applications(db, status=status)
    elif current.is_admin:
        if not current.department_id:
            return []
        rows = crud_application.list_applications(db, department_id=current.department_id, status=status)
    elif current.student_id:
        rows = crud_application.list_applications(db, student_id=current.student_id, status=status)
    else:
        raise HTTPException(status_code=403, detail="Student access required")
    return [_application_out(a) for a in rows]


@router.post("", response_model=ApplicationOut, status_code=201, summary="Apply to a program")
def create_application(
    payload: ApplicationCreate,
    current: CurrentUser = Depends(require_student),
    db: Session = Depends(get_session),
):
    if not get_program(db, payload.program_id):
        raise HTTPException(status_code=404, detail="Program not found")
    if crud_application.find_application(db, current.student_id, payload.program_id):
        raise HTTPException(status_code=409, detail="Already applied to this program")
    application = crud_application.create_application(
        db, student_id=current.student_id, program_id=payload.program_id
    )
    logger.info(f"Application {application.id} submitted for program {payload.program_id}")
    return _application_out(application)


@router.patch("/{application_id}/status", response_model=ApplicationOut, summary="Update application status")
def update_status(
    application_id: str,
    payload: ApplicationStatusUpdate,
    current: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_session),
):
    application = crud_application.get_application(db, application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    if not current.is_super_admin and application.program.department_id != current.department_id:
        raise HTTPException(status_code=403, detail="Not allowed to manage this application")
    application = crud_application.update_application_status(db, application, payload.status)
    return _application_out(application)
