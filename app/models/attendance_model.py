# /app/models/attendance_model.py

from datetime import date as Date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

AttendanceStatus = Literal["present", "absent", "late"]


# --- Marking ---

class AttendanceMark(BaseModel):
    studentId: str
    # Kept as a plain string: unknown statuses are skipped, not rejected.
    status: str


class BulkAttendanceRequest(BaseModel):
    courseId: str = Field(..., min_length=1)
    date: Date
    attendanceData: List[AttendanceMark] = Field(..., min_length=1)


class AttendanceRecord(BaseModel):
    id: str
    studentId: str
    studentName: Optional[str] = None
    courseId: str
    courseName: Optional[str] = None
    courseCode: Optional[str] = None
    date: Date
    status: AttendanceStatus
    markedBy: str


class BulkAttendanceResult(BaseModel):
    count: int = Field(..., description="Rows created or updated; invalid entries are not counted.")
    records: List[AttendanceRecord] = Field(default_factory=list)


# --- Student view ---

class SubjectAttendance(BaseModel):
    courseId: str
    name: str
    code: str
    present: int = 0
    late: int = 0
    absent: int = 0
    total: int = 0
    percentage: int = Field(0, description="Late counts as half a class.")


class StudentAttendance(BaseModel):
    overall: int = 0
    subjectWise: List[SubjectAttendance] = Field(default_factory=list)
    records: List[AttendanceRecord] = Field(default_factory=list)


# --- Course view (staff) ---

class EnrolledStudent(BaseModel):
    id: str
    name: str
    email: str
    studentId: Optional[str] = None


class CourseRoster(BaseModel):
    id: str
    name: str
    code: str
    students: List[EnrolledStudent] = Field(default_factory=list)


class CourseAttendance(BaseModel):
    course: CourseRoster
    date: Optional[Date] = None
    records: List[AttendanceRecord] = Field(default_factory=list)
