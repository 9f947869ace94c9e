from pydantic import BaseModel, Field, constr
from datetime import datetime

from models.models import ApplicationStatus
from matching.logic.constants import QualificationType, RequirementType

# --- Catalog ---

class UniversityCreate(BaseModel):
    name: constr(min_length=1)
    location: constr(min_length=1)
    slug: str | None = None

class UniversityOut(BaseModel):
    id: str
    name: str
    slug: str
    location: str
    class Config:
        from_attributes = True

class DepartmentCreate(BaseModel):
    university_id: str
    name: constr(min_length=1)
    code: constr(min_length=1, max_length=32)

class DepartmentOut(BaseModel):
    id: str
    university_id: str
    name: str
    code: str
    class Config:
        from_attributes = True

class RequirementCreate(BaseModel):
    type: RequirementType
    description: constr(min_length=1)
    subject: str | None = None
    min_grade: str | None = None

class RequirementUpdate(BaseModel):
    type: RequirementType | None = None
    description: str | None = None
    subject: str | None = None
    min_grade: str | None = None

class RequirementOut(BaseModel):
    id: str
    program_id: str
    type: RequirementType
    subject: str | None = None
    min_grade: str | None = None
    description: str
    class Config:
        from_attributes = True

class ProgramCreate(BaseModel):
    department_id: str
    name: constr(min_length=1)
    requirements: list[RequirementCreate] = Field(default_factory=list)

class ProgramOut(BaseModel):
    id: str
    name: str
    department_id: str
    department_name: str | None = None
    university_name: str | None = None
    requirements: list[RequirementOut] = Field(default_factory=list)
    created_at: datetime

# --- Qualifications ---

class QualificationCreate(BaseModel):
    type: QualificationType
    subject: constr(min_length=1)
    grade: constr(min_length=1)

class QualificationUpdate(BaseModel):
    type: QualificationType | None = None
    subject: str | None = None
    grade: str | None = None

class QualificationOut(BaseModel):
    id: str
    student_id: str
    type: QualificationType
    subject: str
    grade: str
    verified: bool
    created_at: datetime
    class Config:
        from_attributes = True

# --- Applications ---

class ApplicationCreate(BaseModel):
    program_id: str

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus

class ApplicationOut(BaseModel):
    id: str
    student_id: str
    program_id: str
    program_name: str | None = None
    status: ApplicationStatus
    submitted_at: datetime | None = None
    created_at: datetime
