# /app/services/timetable_service.py

"""
Weekly timetable slots. Students see the slots of the courses they are
enrolled in, teachers the slots they teach, admins everything. The
listing also works out which class is running now and which one is
next today, from the caller's clock.
"""

import logging
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from ..db.models.user_model import User
from ..models import timetable_model
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

DAY_ORDER = [d.value for d in timetable_model.Day]


def _minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def entry_to_dict(entry) -> Dict:
    course = entry.course
    professor = entry.professor
    return {
        "id": entry.id,
        "courseId": entry.course_id,
        "courseName": course.name if course else None,
        "courseCode": course.code if course else None,
        "day": entry.day,
        "startTime": entry.start_time,
        "endTime": entry.end_time,
        "room": entry.room,
        "professorId": entry.professor_id,
        "professorName": professor.name if professor else None,
    }


def sort_entries(entries: List) -> List:
    return sorted(entries, key=lambda e: (DAY_ORDER.index(e.day), _minutes(e.start_time)))


def find_current_and_next(entries: List, now: datetime):
    """
    Returns (current, next) among today's slots. A slot is current from its
    start minute up to and including its end minute. `entries` must
    already be sorted.
    """
    today = DAY_ORDER[now.weekday()]
    now_minutes = now.hour * 60 + now.minute
    current = next_class = None
    for entry in entries:
        if entry.day != today:
            continue
        start, end = _minutes(entry.start_time), _minutes(entry.end_time)
        if current is None and start <= now_minutes <= end:
            current = entry
        elif next_class is None and start > now_minutes:
            next_class = entry
    return current, next_class


def get_timetable(current_user: User, db: DatabaseService, now: Optional[datetime] = None) -> timetable_model.Timetable:
    if current_user.role == "student":
        course_ids = [c.id for c in db.get_courses_for_student(current_user.id)]
        entries = db.get_timetable_entries(course_ids=course_ids)
    elif current_user.role == "teacher":
        entries = db.get_timetable_entries(professor_id=current_user.id)
    else:
        entries = db.get_timetable_entries()

    entries = sort_entries(entries)
    # Server local time: slots are wall-clock times on campus.
    current, next_class = find_current_and_next(entries, now or datetime.now())
    return timetable_model.Timetable(
        timetable=[entry_to_dict(e) for e in entries],
        currentClass=entry_to_dict(current) if current else None,
        nextClass=entry_to_dict(next_class) if next_class else None,
    )


def _ensure_course_access(course, current_user: User) -> None:
    if current_user.role == "teacher" and course.teacher_id != current_user.id:
        raise PermissionError("Not authorized to manage timetable for this course")


def _ensure_professor(entry, current_user: User) -> None:
    if current_user.role == "teacher" and entry.professor_id != current_user.id:
        raise PermissionError("Not authorized to modify this timetable entry")


def _resolve_professor(course, professor_id: Optional[str], current_user: User, db: DatabaseService) -> str:
    """Teachers always teach their own slots; admins may name any teacher."""
    if current_user.role == "teacher":
        return current_user.id
    if professor_id:
        professor = db.get_user_by_id(professor_id)
        if professor is None or professor.role != "teacher":
            raise ValueError(f"Teacher with ID {professor_id} not found.")
        return professor.id
    return course.teacher_id


def create_entry(data: timetable_model.TimetableEntryCreate, current_user: User,
                 db: DatabaseService) -> Optional[Dict]:
    """Returns None when the course does not exist."""
    course = db.get_course_by_id(data.courseId)
    if course is None:
        return None
    _ensure_course_access(course, current_user)

    record = {
        "id": f"tte_{uuid.uuid4().hex[:12]}",
        "course_id": course.id,
        "day": data.day.value,
        "start_time": data.startTime,
        "end_time": data.endTime,
        "room": data.room.strip(),
        "professor_id": _resolve_professor(course, data.professorId, current_user, db),
    }
    new_entry = db.add_timetable_entry(record)
    logger.info("Timetable slot %s added to course %s", new_entry.id, course.id)
    return entry_to_dict(db.get_timetable_entry(new_entry.id))


def update_entry(entry_id: str, data: timetable_model.TimetableEntryUpdate, current_user: User,
                 db: DatabaseService) -> Optional[Dict]:
    """Partial update. Returns None when the slot (or a new course) does not exist."""
    entry = db.get_timetable_entry(entry_id)
    if entry is None:
        return None
    _ensure_professor(entry, current_user)

    changes = data.model_dump(exclude_unset=True)
    updates = {}
    course = entry.course
    if changes.get("courseId") and changes["courseId"] != entry.course_id:
        course = db.get_course_by_id(changes["courseId"])
        if course is None:
            return None
        _ensure_course_access(course, current_user)
        updates["course_id"] = course.id
    if changes.get("day") is not None:
        updates["day"] = data.day.value
    if changes.get("startTime") is not None:
        updates["start_time"] = data.startTime
    if changes.get("endTime") is not None:
        updates["end_time"] = data.endTime
    if changes.get("room") is not None:
        updates["room"] = data.room.strip()
    if "professorId" in changes and current_user.role == "admin":
        updates["professor_id"] = _resolve_professor(course, data.professorId, current_user, db)

    start = updates.get("start_time", entry.start_time)
    end = updates.get("end_time", entry.end_time)
    if _minutes(end) <= _minutes(start):
        raise ValueError("endTime must be after startTime")

    return entry_to_dict(db.update_timetable_entry(entry, updates))


def delete_entry(entry_id: str, current_user: User, db: DatabaseService) -> bool:
    """Returns False when the slot does not exist."""
    entry = db.get_timetable_entry(entry_id)
    if entry is None:
        return False
    _ensure_professor(entry, current_user)
    db.delete_timetable_entry(entry)
    logger.info("Timetable slot %s deleted by %s", entry_id, current_user.id)
    return True
