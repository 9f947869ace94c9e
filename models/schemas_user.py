from pydantic import BaseModel, EmailStr, constr
from datetime import datetime

from models.models_user import UserRole, ADMIN_ROLES

class UserRegister(BaseModel):
    email: EmailStr
    password: constr(min_length=6)
    name: constr(min_length=1)

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserOut(BaseModel):
    id: str
    email: EmailStr
    name: str
    role: UserRole
    created_at: datetime
    class Config:
        from_attributes = True

class CurrentUser(BaseModel):
    """Identity resolved from a session token, with role-specific profile ids."""
    id: str
    email: EmailStr
    name: str
    role: UserRole
    student_id: str | None = None
    department_id: str | None = None

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT

    @property
    def is_admin(self) -> bool:
        return self.role.value in ADMIN_ROLES

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
