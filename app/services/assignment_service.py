# /app/services/assignment_service.py

"""
Business logic for assignments and their submissions.

Ownership rules: a teacher may only create assignments for, view, and
grade within their own courses; admins may act on any. Violations raise
PermissionError, bad input raises ValueError, and missing records come
back as None so the router can pick the status code.
"""

import logging
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import UploadFile

from ..db.base_class import utcnow
from ..db.models.user_model import User
from ..models import assignment_model
from . import file_storage
from .database_service import DatabaseService
from .results_helpers.grading import as_utc

logger = logging.getLogger(__name__)


def submission_to_dict(submission) -> Dict:
    student = submission.student
    return {
        "id": submission.id,
        "studentId": submission.student_id,
        "studentName": student.name if student else None,
        "submittedAt": submission.submitted_at,
        "fileName": submission.file_name,
        "fileUrl": submission.file_url,
        "fileType": submission.file_type,
        "fileSize": submission.file_size,
        "grade": submission.grade,
        "feedback": submission.feedback,
        "gradedAt": submission.graded_at,
        "gradedBy": submission.graded_by,
    }


def assignment_to_dict(assignment, include_submissions: bool = True) -> Dict:
    course = assignment.course
    teacher = assignment.teacher
    return {
        "id": assignment.id,
        "title": assignment.title,
        "description": assignment.description,
        "courseId": assignment.course_id,
        "courseName": course.name if course else None,
        "courseCode": course.code if course else None,
        "teacherId": assignment.teacher_id,
        "teacherName": teacher.name if teacher else None,
        "dueDate": assignment.due_date,
        "points": assignment.points,
        "submissions": [submission_to_dict(s) for s in assignment.submissions] if include_submissions else [],
    }


def _ensure_owner(owner_id: str, current_user: User, action: str) -> None:
    if current_user.role == "teacher" and owner_id != current_user.id:
        raise PermissionError(f"Not authorized to {action}")


def create_assignment(data: assignment_model.AssignmentCreate, db: DatabaseService, current_user: User) -> Optional[Dict]:
    course = db.get_course_by_id(data.courseId)
    if course is None:
        return None
    _ensure_owner(course.teacher_id, current_user, "add assignments to this course")

    record = {
        "id": f"asg_{uuid.uuid4().hex[:12]}",
        "title": data.title.strip(),
        "description": data.description,
        "course_id": course.id,
        # Admin-created assignments belong to the course's teacher.
        "teacher_id": current_user.id if current_user.role == "teacher" else course.teacher_id,
        "due_date": as_utc(data.dueDate),
        "points": data.points,
    }
    new_assignment = db.add_assignment(record)
    return assignment_to_dict(db.get_assignment(new_assignment.id))


def list_assignments(db: DatabaseService, current_user: User, course_id: Optional[str] = None,
                     status: Optional[str] = None, now: Optional[datetime] = None) -> List[Dict]:
    """
    `status="upcoming"` keeps assignments due now or later, `"past"` the
    ones already due.
    """
    teacher_id = current_user.id if current_user.role == "teacher" else None
    now = now or utcnow()
    assignments = db.get_assignments(
        course_id=course_id,
        teacher_id=teacher_id,
        due_after=now if status == "upcoming" else None,
        due_before=now if status == "past" else None,
    )
    return [assignment_to_dict(a, include_submissions=False) for a in assignments]


def get_assignment(assignment_id: str, db: DatabaseService, current_user: User) -> Optional[Dict]:
    assignment = db.get_assignment(assignment_id)
    if assignment is None:
        return None
    _ensure_owner(assignment.teacher_id, current_user, "access this assignment")
    data = assignment_to_dict(assignment)
    if current_user.role == "student":
        # Students only ever see their own submission.
        data["submissions"] = [s for s in data["submissions"] if s["studentId"] == current_user.id]
    return data


async def submit_assignment(assignment_id: str, file: UploadFile, db: DatabaseService, student: User,
                            upload_dir: Optional[str] = None) -> Optional[Dict]:
    """
    Stores the student's file and creates or replaces their single
    submission for the assignment.
    """
    assignment = db.get_assignment(assignment_id)
    if assignment is None:
        return None

    file_fields = await file_storage.store_upload(file, upload_dir=upload_dir)
    file_fields["file_size"] = str(file_fields["file_size"])
    file_fields["submitted_at"] = utcnow()

    existing = db.get_submission_for_student(assignment.id, student.id)
    if existing is not None:
        db.update_submission(existing, file_fields)
    else:
        db.add_submission({
            "id": f"sub_{uuid.uuid4().hex[:12]}",
            "assignment_id": assignment.id,
            "student_id": student.id,
            **file_fields,
        })
    logger.info("Student %s submitted assignment %s", student.id, assignment.id)
    return get_assignment(assignment.id, db, student)


def grade_submission(assignment_id: str, grade_request: assignment_model.GradeRequest,
                     db: DatabaseService, current_user: User) -> Optional[Dict]:
    """
    Returns None when either the assignment or the submission is missing.
    """
    assignment = db.get_assignment(assignment_id)
    if assignment is None:
        return None
    _ensure_owner(assignment.teacher_id, current_user, "grade this assignment")

    submission = db.get_submission(assignment.id, grade_request.submissionId)
    if submission is None:
        return None

    if grade_request.grade < 0 or grade_request.grade > assignment.points:
        raise ValueError(f"Grade must be between 0 and {assignment.points}.")

    db.update_submission(submission, {
        "grade": grade_request.grade,
        "feedback": grade_request.feedback,
        "graded_at": utcnow(),
        "graded_by": current_user.id,
    })
    return assignment_to_dict(db.get_assignment(assignment.id))


def update_assignment(assignment_id: str, assignment_update: assignment_model.AssignmentUpdate,
                      db: DatabaseService, current_user: User) -> Optional[Dict]:
    assignment = db.get_assignment(assignment_id)
    if assignment is None:
        return None
    _ensure_owner(assignment.teacher_id, current_user, "update this assignment")

    changes = assignment_update.model_dump(exclude_unset=True, exclude_none=True)
    updates = {}
    if "title" in changes:
        updates["title"] = changes["title"].strip()
    if "description" in changes:
        updates["description"] = changes["description"]
    if "dueDate" in changes:
        updates["due_date"] = as_utc(changes["dueDate"])
    if "points" in changes:
        highest = max((s.grade for s in assignment.submissions if s.grade is not None), default=None)
        if highest is not None and changes["points"] < highest:
            raise ValueError(f"Points cannot be lower than an existing grade ({highest:g}).")
        updates["points"] = changes["points"]

    db.update_assignment(assignment, updates)
    return assignment_to_dict(db.get_assignment(assignment.id))


def delete_assignment(assignment_id: str, db: DatabaseService, current_user: User) -> bool:
    """Deletes the assignment and its submissions. Returns False when it does not exist."""
    assignment = db.get_assignment(assignment_id)
    if assignment is None:
        return False
    _ensure_owner(assignment.teacher_id, current_user, "delete this assignment")
    db.delete_assignment(assignment)
    logger.info("Assignment %s deleted by %s", assignment_id, current_user.id)
    return True
