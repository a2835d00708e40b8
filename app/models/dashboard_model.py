# /app/models/dashboard_model.py

# --- Core Imports ---
from typing import List, Optional

from pydantic import BaseModel, Field

# --- Model Definition ---

class RecentAssignment(BaseModel):
    id: str
    title: str
    courseName: Optional[str] = None
    courseCode: Optional[str] = None
    dueDate: Optional[str] = None


class DashboardSummary(BaseModel):
    """
    Defines the data contract for the dashboard summary endpoint. Students
    and staff see different cards, so the staff-only fields are optional.
    """

    activeCourses: int = Field(
        ...,
        description="Courses the student is enrolled in, or the courses a teacher owns (all courses for admins).",
        examples=[4]
    )

    upcomingAssignments: Optional[int] = Field(
        default=None,
        description="Students only: assignments due from now on that have not been submitted yet.",
        examples=[2]
    )

    totalStudents: Optional[int] = Field(
        default=None,
        description="Staff only: distinct students across the owned courses (all students for admins).",
        examples=[112]
    )

    recentAssignments: List[RecentAssignment] = Field(default_factory=list)
