# /app/services/database_helpers/attendance_repository_sql.py

"""
Raw SQLAlchemy queries for attendance records. One row exists per
(student, course, day); bulk marking upserts against that key inside a
single commit so a class register is saved all-or-nothing.
"""

from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from app.db.models.attendance_models import Attendance
from app.db.models.user_model import User


class AttendanceRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_records_for_student(self, student_id: str, course_id: Optional[str] = None) -> List[Attendance]:
        """Newest day first."""
        query = (
            self.db.query(Attendance)
            .options(joinedload(Attendance.course))
            .filter(Attendance.student_id == student_id)
        )
        if course_id:
            query = query.filter(Attendance.course_id == course_id)
        return query.order_by(Attendance.date.desc(), Attendance.course_id).all()

    def get_records_for_course(self, course_id: str, on_date: Optional[date] = None) -> List[Attendance]:
        query = (
            self.db.query(Attendance)
            .join(User, Attendance.student_id == User.id)
            .options(joinedload(Attendance.student), joinedload(Attendance.course))
            .filter(Attendance.course_id == course_id)
        )
        if on_date is not None:
            query = query.filter(Attendance.date == on_date)
        return query.order_by(Attendance.date, User.name).all()

    def get_records_for_courses(self, course_ids: List[str]) -> List[Attendance]:
        if not course_ids:
            return []
        return (
            self.db.query(Attendance)
            .filter(Attendance.course_id.in_(course_ids))
            .order_by(Attendance.course_id, Attendance.date)
            .all()
        )

    def upsert_records(self, records: List[Dict]) -> List[Attendance]:
        """
        Each record carries `id`, `student_id`, `course_id`, `date`,
        `status` and `marked_by`. An existing row for the same student,
        course and day keeps its id and takes the new status.
        """
        saved = []
        for record in records:
            existing = (
                self.db.query(Attendance)
                .filter(
                    Attendance.student_id == record["student_id"],
                    Attendance.course_id == record["course_id"],
                    Attendance.date == record["date"],
                )
                .first()
            )
            if existing is not None:
                existing.status = record["status"]
                existing.marked_by = record["marked_by"]
                saved.append(existing)
            else:
                new_record = Attendance(**record)
                self.db.add(new_record)
                saved.append(new_record)
        self.db.commit()
        for row in saved:
            self.db.refresh(row)
        return saved
