from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship
from db import Base
from models.models_user import _uuid
from matching.logic.constants import QualificationType, RequirementType  # noqa: F401


class ApplicationStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    UNDER_REVIEW = "UNDER_REVIEW"
    CONDITIONAL = "CONDITIONAL"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class University(Base):
    __tablename__ = "universities"
    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False)
    location = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    departments = relationship("Department", back_populates="university")


class Department(Base):
    __tablename__ = "departments"
    id = Column(String(36), primary_key=True, default=_uuid)
    university_id = Column(String(36), ForeignKey("universities.id"), nullable=False)
    name = Column(String(255), nullable=False)
    code = Column(String(32), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    university = relationship("University", back_populates="departments")
    programs = relationship("Program", back_populates="department")


class Program(Base):
    __tablename__ = "programs"
    id = Column(String(36), primary_key=True, default=_uuid)
    department_id = Column(String(36), ForeignKey("departments.id"), nullable=False)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    department = relationship("Department", back_populates="programs")
    requirements = relationship(
        "ProgramRequirement",
        back_populates="program",
        cascade="all, delete-orphan",
        order_by="ProgramRequirement.created_at",
    )
    applications = relationship("Application", back_populates="program")


class ProgramRequirement(Base):
    __tablename__ = "program_requirements"
    id = Column(String(36), primary_key=True, default=_uuid)
    program_id = Column(String(36), ForeignKey("programs.id"), nullable=False)
    type = Column(String(20), nullable=False)
    subject = Column(String(255), nullable=True)
    min_grade = Column(String(32), nullable=True)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    program = relationship("Program", back_populates="requirements")

    __table_args__ = (Index("ix_program_requirements_program_id", "program_id"),)


class Qualification(Base):
    __tablename__ = "qualifications"
    id = Column(String(36), primary_key=True, default=_uuid)
    student_id = Column(String(36), ForeignKey("students.id"), nullable=False)
    type = Column(String(20), nullable=False)
    subject = Column(String(255), nullable=False)
    grade = Column(String(32), nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    student = relationship("Student", back_populates="qualifications")

    __table_args__ = (Index("ix_qualifications_student_id", "student_id"),)


class Application(Base):
    __tablename__ = "applications"
    id = Column(String(36), primary_key=True, default=_uuid)
    student_id = Column(String(36), ForeignKey("students.id"), nullable=False)
    program_id = Column(String(36), ForeignKey("programs.id"), nullable=False)
    status = Column(String(20), nullable=False, default=ApplicationStatus.PENDING.value)
    submitted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    student = relationship("Student", back_populates="applications")
    program = relationship("Program", back_populates="applications")
