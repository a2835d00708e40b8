# /app/models/user_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRole(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class UserBase(BaseModel):
    name: str = Field(..., min_length=2, description="The user's full name.")
    email: EmailStr
    role: UserRole = Field(default=UserRole.STUDENT)
    department: str = Field(..., min_length=1)
    studentId: Optional[str] = Field(default=None, description="Institution-issued student number.")
    phone: Optional[str] = Field(default=None)


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)


class UserUpdate(BaseModel):
    """Profile fields a user may change about themselves. Omitted fields stay as they are."""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    department: Optional[str] = None


class User(UserBase):
    """The public representation of an account. Never includes the hash."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    is_active: bool = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
