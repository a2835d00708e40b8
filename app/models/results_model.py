# /app/models/results_model.py

"""
API contracts for the three results read-paths and the spreadsheet
import summary.
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field


# --- Spreadsheet import ---

class ExamImportError(BaseModel):
    row: int = Field(..., description="1-based spreadsheet row number.")
    message: str


class ExamImportSummary(BaseModel):
    processed: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: List[ExamImportError] = Field(default_factory=list)


# --- Student view ---

class ResultMetadata(BaseModel):
    term: Optional[str] = None
    examType: Optional[str] = None
    remarks: Optional[str] = None
    feedback: Optional[str] = None


class ResultRecord(BaseModel):
    id: str
    type: Literal["assignment", "exam"]
    title: str
    courseName: str
    courseCode: str
    courseId: Optional[str] = None
    personName: Optional[str] = None
    personEmail: Optional[str] = None
    marksObtained: float
    totalMarks: float
    percentage: float
    date: Optional[datetime] = None
    metadata: ResultMetadata = Field(default_factory=ResultMetadata)


class HighestScore(BaseModel):
    percentage: float
    title: str
    courseName: str
    type: Literal["assignment", "exam"]


class SubjectScore(BaseModel):
    courseId: str
    subject: str
    courseCode: str
    score: int


class RecentPoint(BaseModel):
    label: str
    percentage: int


class StudentResults(BaseModel):
    overallAverage: float = 0
    totalGraded: int = 0
    highestScore: Optional[HighestScore] = None
    subjectWise: List[SubjectScore] = Field(default_factory=list)
    assignments: List[ResultRecord] = Field(default_factory=list)
    recentPerformance: List[RecentPoint] = Field(default_factory=list)
    gradeDistribution: Dict[str, int] = Field(
        default_factory=lambda: {"A": 0, "B": 0, "C": 0, "D": 0, "F": 0}
    )


# --- Teacher view ---

class TeacherResultRow(BaseModel):
    id: str
    examTitle: str
    examDate: Optional[datetime] = None
    studentId: str
    studentName: Optional[str] = None
    studentEmail: Optional[str] = None
    studentNumber: Optional[str] = None
    department: Optional[str] = None
    marksObtained: float
    totalMarks: float
    percentage: float
    grade: str
    metadata: ResultMetadata = Field(default_factory=ResultMetadata)
    uploadedBy: Optional[str] = None
    uploadedByName: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class TeacherCourseResults(BaseModel):
    courseId: str
    courseName: str
    courseCode: str
    teacherName: Optional[str] = None
    totalRecords: int = 0
    uniqueStudents: int = 0
    results: List[TeacherResultRow] = Field(default_factory=list)


class TeacherResultsSummary(BaseModel):
    totalCourses: int = 0
    totalRecords: int = 0
    uniqueStudents: int = 0
    lastImportAt: Optional[datetime] = None


class TeacherResults(BaseModel):
    summary: TeacherResultsSummary = Field(default_factory=TeacherResultsSummary)
    courses: List[TeacherCourseResults] = Field(default_factory=list)
