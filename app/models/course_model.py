# /app/models/course_model.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Weekday(str, Enum):
    MONDAY = "Monday"; TUESDAY = "Tuesday"; WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"; FRIDAY = "Friday"; SATURDAY = "Saturday"


class ScheduleSlot(BaseModel):
    day: Weekday
    startTime: str = Field(..., min_length=1)
    endTime: str = Field(..., min_length=1)
    room: str = Field(..., min_length=1)


class CourseCreate(BaseModel):
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = Field(default="")
    credits: int = Field(default=1, ge=1)
    department: str = Field(..., min_length=1)
    schedule: List[ScheduleSlot] = Field(..., min_length=1)
    # Admins may create a course on behalf of a teacher.
    teacherId: Optional[str] = Field(default=None)

    @field_validator("code")
    @classmethod
    def normalise_code(cls, v: str) -> str:
        return v.strip().upper()


class CourseUpdate(BaseModel):
    """Partial update; only the fields that are sent are changed."""
    code: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    credits: Optional[int] = Field(default=None, ge=1)
    department: Optional[str] = Field(default=None, min_length=1)
    schedule: Optional[List[ScheduleSlot]] = Field(default=None, min_length=1)

    @field_validator("code")
    @classmethod
    def normalise_code(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v is not None else v


# --- Resources ---

class ResourceCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(default="")
    fileUrl: str = Field(..., min_length=1)
    fileType: Optional[str] = None


class Resource(BaseModel):
    id: str
    title: str
    description: str
    fileUrl: str
    fileType: Optional[str] = None
    uploadedBy: str
    uploadedAt: Optional[datetime] = None


class PersonSummary(BaseModel):
    id: str
    name: str
    email: str


class Course(BaseModel):
    id: str
    code: str
    name: str
    description: str
    credits: int
    department: str
    schedule: List[ScheduleSlot]
    teacher: Optional[PersonSummary] = None
    studentCount: int = 0
    # Newest first.
    resources: List[Resource] = Field(default_factory=list)
    createdAt: Optional[datetime] = None
