# /app/services/dashboard_service.py

# --- Core Imports ---
import logging

from ..db.base_class import utcnow
from ..db.models.user_model import User
from ..models.dashboard_model import DashboardSummary, RecentAssignment
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

RECENT_ASSIGNMENT_LIMIT = 5

# --- Core Public Function ---

def _recent(assignment) -> RecentAssignment:
    course = assignment.course
    return RecentAssignment(
        id=assignment.id,
        title=assignment.title,
        courseName=course.name if course else None,
        courseCode=course.code if course else None,
        dueDate=assignment.due_date.isoformat() if assignment.due_date else None,
    )


def get_summary_data(db: DatabaseService, current_user: User) -> DashboardSummary:
    """
    Calculates the dashboard cards for the signed-in user.

    Students: enrolled courses and open assignments they have not yet
    submitted. Staff: owned courses (all for admins), distinct students in
    them, and the most recently created assignments.
    """
    try:
        if current_user.role == "student":
            courses = db.get_courses_for_student(current_user.id)
            upcoming = db.get_assignments(course_ids=[c.id for c in courses], due_after=utcnow())
            pending = [
                a for a in upcoming
                if db.get_submission_for_student(a.id, current_user.id) is None
            ]
            return DashboardSummary(
                activeCourses=len(courses),
                upcomingAssignments=len(pending),
                recentAssignments=[_recent(a) for a in pending[:RECENT_ASSIGNMENT_LIMIT]],
            )

        teacher_id = None if current_user.role == "admin" else current_user.id
        courses = db.get_all_courses(teacher_id=teacher_id)
        if current_user.role == "admin":
            total_students = db.count_students()
        else:
            total_students = db.count_students_in_courses([c.id for c in courses])
        recent = db.get_recent_assignments(teacher_id=teacher_id, limit=RECENT_ASSIGNMENT_LIMIT)
        return DashboardSummary(
            activeCourses=len(courses),
            totalStudents=total_students,
            recentAssignments=[_recent(a) for a in recent],
        )
    except Exception:
        logger.exception("Failed to calculate dashboard summary for %s", current_user.id)
        # Re-raise so the router layer turns it into a 500.
        raise
