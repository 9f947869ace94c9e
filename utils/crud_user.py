import logging
import os
from sqlalchemy.orm import Session
from sqlalchemy import select
from models.models_user import User, Student, DepartmentAdministrator, UserRole
from utils.auth_utils import hash_password

logger = logging.getLogger(__name__)

def get_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email.lower())).scalar_one_or_none()

def create_user(db: Session, *, email: str, name: str, role: str, password_hash: str) -> User:
    user = User(email=email.lower(), name=name, role=role, password_hash=password_hash)
    db.add(user)
    if role == UserRole.STUDENT.value:
        user.student = Student()
    elif role == UserRole.DEPARTMENT_ADMINISTRATOR.value:
        user.department_administrator = DepartmentAdministrator()
    db.flush()
    return user

def get_student_by_user_id(db: Session, user_id: str) -> Student | None:
    return db.execute(select(Student).where(Student.user_id == user_id)).scalar_one_or_none()

def get_department_id_for_user(db: Session, user_id: str) -> str | None:
    admin = db.execute(
        select(DepartmentAdministrator).where(DepartmentAdministrator.user_id == user_id)
    ).scalar_one_or_none()
    return admin.department_id if admin else None

def assign_department(db: Session, user: User, department_id: str) -> DepartmentAdministrator:
    admin = user.department_administrator
    if admin is None:
        admin = DepartmentAdministrator(user_id=user.id)
        db.add(admin)
    admin.department_id = department_id
    db.flush()
    return admin

def seed_super_admin(db: Session) -> User | None:
    """Create the super admin named by SUPER_ADMIN_EMAIL/SUPER_ADMIN_PASSWORD if missing."""
    email = os.getenv("SUPER_ADMIN_EMAIL")
    password = os.getenv("SUPER_ADMIN_PASSWORD")
    if not email or not password:
        logger.info("Super admin seeding skipped (SUPER_ADMIN_EMAIL/SUPER_ADMIN_PASSWORD not set)")
        return None
    existing = get_user_by_email(db, email)
    if existing:
        return existing
    logger.info(f"Seeding super admin {email}")
    return create_user(
        db,
        email=email,
        name=os.getenv("SUPER_ADMIN_NAME", "Super Admin"),
        role=UserRole.SUPER_ADMIN.value,
        password_hash=hash_password(password),
    )
