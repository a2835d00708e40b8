# /app/models/assignment_model.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class AssignmentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(default="")
    courseId: str
    dueDate: datetime
    points: int = Field(default=100, gt=0)


class Submission(BaseModel):
    id: str
    studentId: str
    studentName: Optional[str] = None
    submittedAt: Optional[datetime] = None
    fileName: Optional[str] = None
    fileUrl: Optional[str] = None
    fileType: Optional[str] = None
    fileSize: Optional[str] = None
    grade: Optional[float] = None
    feedback: Optional[str] = None
    gradedAt: Optional[datetime] = None
    gradedBy: Optional[str] = None


class Assignment(BaseModel):
    id: str
    title: str
    description: str
    courseId: str
    courseName: Optional[str] = None
    courseCode: Optional[str] = None
    teacherId: str
    teacherName: Optional[str] = None
    dueDate: datetime
    points: int
    submissions: List[Submission] = Field(default_factory=list)


class GradeRequest(BaseModel):
    submissionId: str
    grade: float = Field(..., description="Must lie between 0 and the assignment's points.")
    feedback: Optional[str] = None


class AssignmentUpdate(BaseModel):
    """Partial update. The course of an assignment never changes."""
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    dueDate: Optional[datetime] = None
    points: Optional[int] = Field(default=None, gt=0)
