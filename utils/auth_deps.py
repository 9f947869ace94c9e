import logging
import jwt
from fastapi import Depends, Header, Cookie, HTTPException
from sqlalchemy.orm import Session

from db import get_session
from models.models_user import User, UserRole
from models.schemas_user import CurrentUser
from utils.auth_utils import decode_token, token_from_request, SESSION_COOKIE
from utils.crud_user import get_student_by_user_id, get_department_id_for_user

logger = logging.getLogger(__name__)

def auth_user(
    authorization: str | None = Header(default=None),
    session: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    db: Session = Depends(get_session),
) -> CurrentUser:
    token = token_from_request(authorization, session)
    if not token:
        raise HTTPException(status_code=401, detail="Missing token")
    try:
        data = decode_token(token)
    except jwt.PyJWTError as e:
        logger.error(f"Token decode failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid token")
    user_id = data.get("sub")
    user = db.get(User, user_id) if user_id else None
    if not user:
        logger.error(f"User not found for id: {user_id}")
        raise HTTPException(status_code=401, detail="User not found")

    student = get_student_by_user_id(db, user.id) if user.role == UserRole.STUDENT.value else None
    department_id = (
        get_department_id_for_user(db, user.id)
        if user.role == UserRole.DEPARTMENT_ADMINISTRATOR.value
        else None
    )
    return CurrentUser(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        student_id=student.id if student else None,
        department_id=department_id,
    )

def require_admin(current: CurrentUser = Depends(auth_user)) -> CurrentUser:
    if not current.is_admin:
        raise HTTPException(status_code=403, detail="Administrator access required")
    return current

def require_super_admin(current: CurrentUser = Depends(auth_user)) -> CurrentUser:
    if not current.is_super_admin:
        raise HTTPException(status_code=403, detail="Super admin access required")
    return current

def require_student(current: CurrentUser = Depends(auth_user)) -> CurrentUser:
    if not current.is_student or not current.student_id:
        raise HTTPException(status_code=403, detail="Student access required")
    return current
