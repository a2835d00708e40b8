# /app/services/course_service.py

"""
Business logic for courses: creation with ownership stamping, listing,
details, owner-only edits and resources, and student self-enrollment.
"""

import logging
import uuid
from typing import Dict, List, Optional

from ..db.models.user_model import User
from ..models import course_model
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def resource_to_dict(resource) -> Dict:
    return {
        "id": resource.id,
        "title": resource.title,
        "description": resource.description,
        "fileUrl": resource.file_url,
        "fileType": resource.file_type,
        "uploadedBy": resource.uploaded_by,
        "uploadedAt": resource.uploaded_at,
    }


def course_to_dict(course) -> Dict:
    teacher = course.teacher
    return {
        "id": course.id,
        "code": course.code,
        "name": course.name,
        "description": course.description,
        "credits": course.credits,
        "department": course.department,
        "schedule": course.schedule or [],
        "teacher": {"id": teacher.id, "name": teacher.name, "email": teacher.email} if teacher else None,
        "studentCount": len(course.students),
        "resources": [resource_to_dict(r) for r in course.resources],
        "createdAt": course.created_at,
    }


def create_course(course_data: course_model.CourseCreate, db: DatabaseService, current_user: User) -> Dict:
    """
    Teachers always own the courses they create. Admins may assign another
    teacher through `teacherId`.
    """
    if db.get_course_by_code(course_data.code):
        raise ValueError(f"A course with code {course_data.code} already exists.")

    teacher_id = current_user.id
    if current_user.role == "admin" and course_data.teacherId:
        teacher = db.get_user_by_id(course_data.teacherId)
        if teacher is None or teacher.role != "teacher":
            raise ValueError(f"Teacher with ID {course_data.teacherId} not found.")
        teacher_id = teacher.id

    record = {
        "id": f"crs_{uuid.uuid4().hex[:12]}",
        "code": course_data.code,
        "name": course_data.name.strip(),
        "description": course_data.description,
        "credits": course_data.credits,
        "department": course_data.department.strip(),
        "schedule": [slot.model_dump(mode="json") for slot in course_data.schedule],
        "teacher_id": teacher_id,
    }
    return course_to_dict(db.add_course(record))


def list_courses(db: DatabaseService, teacher_id: Optional[str] = None) -> List[Dict]:
    return [course_to_dict(c) for c in db.get_all_courses(teacher_id=teacher_id)]


def get_course_details(course_id: str, db: DatabaseService) -> Optional[Dict]:
    course = db.get_course_by_id(course_id)
    return course_to_dict(course) if course else None


def enroll_student(course_id: str, student: User, db: DatabaseService) -> Optional[Dict]:
    """Returns None when the course does not exist; ValueError when already enrolled."""
    course = db.get_course_by_id(course_id)
    if course is None:
        return None
    if any(s.id == student.id for s in course.students):
        raise ValueError("Student is already enrolled in this course.")
    return course_to_dict(db.enroll_student(course, student))


def _ensure_owner(course, current_user: User, action: str) -> None:
    if current_user.role == "teacher" and course.teacher_id != current_user.id:
        raise PermissionError(f"Not authorized to {action}")


def update_course(course_id: str, course_update: course_model.CourseUpdate, db: DatabaseService,
                  current_user: User) -> Optional[Dict]:
    course = db.get_course_by_id(course_id)
    if course is None:
        return None
    _ensure_owner(course, current_user, "update this course")

    changes = course_update.model_dump(exclude_unset=True, exclude_none=True)
    if "code" in changes and changes["code"] != course.code:
        existing = db.get_course_by_code(changes["code"])
        if existing is not None and existing.id != course.id:
            raise ValueError(f"A course with code {changes['code']} already exists.")
    if "schedule" in changes:
        changes["schedule"] = [slot.model_dump(mode="json") for slot in course_update.schedule]
    for field in ("name", "department"):
        if field in changes:
            changes[field] = changes[field].strip()

    return course_to_dict(db.update_course(course, changes))


def delete_course(course_id: str, db: DatabaseService, current_user: User) -> bool:
    """
    Removes the course along with its assignments, resources, timetable
    slots, attendance and exam results. Returns False when it does not exist.
    """
    course = db.get_course_by_id(course_id)
    if course is None:
        return False
    _ensure_owner(course, current_user, "delete this course")
    db.delete_course(course)
    logger.info("Course %s deleted by %s", course_id, current_user.id)
    return True


def add_resource(course_id: str, resource: course_model.ResourceCreate, db: DatabaseService,
                 current_user: User) -> Optional[Dict]:
    course = db.get_course_by_id(course_id)
    if course is None:
        return None
    _ensure_owner(course, current_user, "add resources to this course")

    new_resource = db.add_course_resource({
        "id": f"res_{uuid.uuid4().hex[:12]}",
        "course_id": course.id,
        "title": resource.title.strip(),
        "description": resource.description,
        "file_url": resource.fileUrl,
        "file_type": resource.fileType,
        "uploaded_by": current_user.id,
    })
    return resource_to_dict(new_resource)
