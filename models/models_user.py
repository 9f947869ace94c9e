import uuid
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from db import Base


class UserRole(str, Enum):
    STUDENT = "STUDENT"
    DEPARTMENT_ADMINISTRATOR = "DEPARTMENT_ADMINISTRATOR"
    SUPER_ADMIN = "SUPER_ADMIN"


ADMIN_ROLES = {UserRole.DEPARTMENT_ADMINISTRATOR.value, UserRole.SUPER_ADMIN.value}


def _uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=UserRole.STUDENT.value)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=False), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    student = relationship("Student", back_populates="user", uselist=False)
    department_administrator = relationship("DepartmentAdministrator", back_populates="user", uselist=False)

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES


class Student(Base):
    __tablename__ = "students"
    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="student")
    qualifications = relationship("Qualification", back_populates="student", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="student")


class DepartmentAdministrator(Base):
    __tablename__ = "department_administrators"
    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    department_id = Column(String(36), ForeignKey("departments.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="department_administrator")
    department = relationship("Department")
