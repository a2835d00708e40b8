# /app/services/database_service.py

from typing import Dict, Generator, List, Optional
from datetime import date, datetime

from sqlalchemy.orm import Session
from fastapi import Depends

# --- Core Database Setup ---
from app.db.database import get_db

# --- Repository Imports ---
from .database_helpers.user_course_repository_sql import UserCourseRepositorySQL
from .database_helpers.assignment_repository_sql import AssignmentRepositorySQL
from .database_helpers.exam_result_repository_sql import ExamResultRepositorySQL
from .database_helpers.attendance_repository_sql import AttendanceRepositorySQL
from .database_helpers.timetable_repository_sql import TimetableRepositorySQL
from .database_helpers.note_repository_sql import NoteRepositorySQL
from .database_helpers.bus_repository_sql import BusRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        """
        Wraps one request-scoped SQLAlchemy session and exposes every
        repository method the services need through a single object.
        """
        self.session = db_session
        self.user_course_repo = UserCourseRepositorySQL(db_session)
        self.assignment_repo = AssignmentRepositorySQL(db_session)
        self.exam_result_repo = ExamResultRepositorySQL(db_session)
        self.attendance_repo = AttendanceRepositorySQL(db_session)
        self.timetable_repo = TimetableRepositorySQL(db_session)
        self.note_repo = NoteRepositorySQL(db_session)
        self.bus_repo = BusRepositorySQL(db_session)

    def rollback(self) -> None:
        self.session.rollback()

    # --- USER METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str): return self.user_course_repo.get_user_by_id(user_id)
    def get_user_by_email(self, email: str): return self.user_course_repo.get_user_by_email(email)
    def get_student_by_email(self, email: str): return self.user_course_repo.get_student_by_email(email)
    def get_user_by_student_id(self, student_id: str): return self.user_course_repo.get_user_by_student_id(student_id)
    def add_user(self, user_record: Dict): return self.user_course_repo.add_user(user_record)
    def count_students(self) -> int: return self.user_course_repo.count_students()
    def update_user(self, user, data: Dict): return self.user_course_repo.update_user(user, data)

    # --- COURSE METHODS (DELEGATED) ---
    def get_all_courses(self, teacher_id: Optional[str] = None) -> List: return self.user_course_repo.get_all_courses(teacher_id=teacher_id)
    def get_course_by_id(self, course_id: str): return self.user_course_repo.get_course_by_id(course_id)
    def get_course_by_code(self, code: str): return self.user_course_repo.get_course_by_code(code)
    def add_course(self, course_record: Dict): return self.user_course_repo.add_course(course_record)
    def find_courses(self, teacher_id: Optional[str] = None, course_id: Optional[str] = None) -> List:
        return self.user_course_repo.find_courses(teacher_id=teacher_id, course_id=course_id)
    def get_courses_for_student(self, student_id: str) -> List: return self.user_course_repo.get_courses_for_student(student_id)
    def enroll_student(self, course, student): return self.user_course_repo.enroll_student(course, student)
    def count_students_in_courses(self, course_ids: List[str]) -> int: return self.user_course_repo.count_students_in_courses(course_ids)
    def update_course(self, course, data: Dict): return self.user_course_repo.update_course(course, data)
    def delete_course(self, course) -> None: return self.user_course_repo.delete_course(course)
    def add_course_resource(self, resource_record: Dict): return self.user_course_repo.add_resource(resource_record)

    # --- ASSIGNMENT & SUBMISSION METHODS (DELEGATED) ---
    def add_assignment(self, assignment_record: Dict): return self.assignment_repo.add_assignment(assignment_record)
    def get_assignment(self, assignment_id: str): return self.assignment_repo.get_assignment(assignment_id)
    def get_assignments(
        self,
        course_id: Optional[str] = None,
        teacher_id: Optional[str] = None,
        course_ids: Optional[List[str]] = None,
        due_after: Optional[datetime] = None,
        due_before: Optional[datetime] = None,
    ) -> List:
        return self.assignment_repo.get_assignments(
            course_id=course_id, teacher_id=teacher_id, course_ids=course_ids,
            due_after=due_after, due_before=due_before,
        )
    def update_assignment(self, assignment, data: Dict): return self.assignment_repo.update_assignment(assignment, data)
    def delete_assignment(self, assignment) -> None: return self.assignment_repo.delete_assignment(assignment)
    def get_recent_assignments(self, teacher_id: Optional[str] = None, limit: int = 5) -> List:
        return self.assignment_repo.get_recent_assignments(teacher_id=teacher_id, limit=limit)
    def get_submission(self, assignment_id: str, submission_id: str): return self.assignment_repo.get_submission(assignment_id, submission_id)
    def get_submission_for_student(self, assignment_id: str, student_id: str): return self.assignment_repo.get_submission_for_student(assignment_id, student_id)
    def add_submission(self, submission_record: Dict): return self.assignment_repo.add_submission(submission_record)
    def update_submission(self, submission, data: Dict): return self.assignment_repo.update_submission(submission, data)
    def get_graded_submissions_for_student(self, student_id: str) -> List: return self.assignment_repo.get_graded_submissions_for_student(student_id)
    def get_all_graded_submissions(self) -> List: return self.assignment_repo.get_all_graded_submissions()

    # --- EXAM RESULT METHODS (DELEGATED) ---
    def find_exam_result(self, exam_title: str, course_id: str, student_id: str):
        return self.exam_result_repo.find_by_natural_key(exam_title, course_id, student_id)
    def add_exam_result(self, result_record: Dict): return self.exam_result_repo.add_result(result_record)
    def update_exam_result(self, result, data: Dict): return self.exam_result_repo.update_result(result, data)
    def get_exam_results_for_student(self, student_id: str) -> List: return self.exam_result_repo.get_results_for_student(student_id)
    def get_exam_results_for_courses(self, course_ids: List[str]) -> List: return self.exam_result_repo.get_results_for_courses(course_ids)

    # --- ATTENDANCE METHODS (DELEGATED) ---
    def get_attendance_for_student(self, student_id: str, course_id: Optional[str] = None) -> List:
        return self.attendance_repo.get_records_for_student(student_id, course_id=course_id)
    def get_attendance_for_course(self, course_id: str, on_date: Optional[date] = None) -> List:
        return self.attendance_repo.get_records_for_course(course_id, on_date=on_date)
    def get_attendance_for_courses(self, course_ids: List[str]) -> List: return self.attendance_repo.get_records_for_courses(course_ids)
    def upsert_attendance(self, records: List[Dict]) -> List: return self.attendance_repo.upsert_records(records)

    # --- TIMETABLE METHODS (DELEGATED) ---
    def get_timetable_entries(self, course_ids: Optional[List[str]] = None, professor_id: Optional[str] = None) -> List:
        return self.timetable_repo.get_entries(course_ids=course_ids, professor_id=professor_id)
    def get_timetable_entry(self, entry_id: str): return self.timetable_repo.get_entry(entry_id)
    def add_timetable_entry(self, entry_record: Dict): return self.timetable_repo.add_entry(entry_record)
    def update_timetable_entry(self, entry, data: Dict): return self.timetable_repo.update_entry(entry, data)
    def delete_timetable_entry(self, entry) -> None: return self.timetable_repo.delete_entry(entry)

    # --- NOTE METHODS (DELEGATED) ---
    def get_notes(self, subject: Optional[str] = None, course_id: Optional[str] = None) -> List:
        return self.note_repo.get_notes(subject=subject, course_id=course_id)
    def get_note(self, note_id: str): return self.note_repo.get_note(note_id)
    def add_note(self, note_record: Dict): return self.note_repo.add_note(note_record)
    def increment_note_downloads(self, note): return self.note_repo.increment_download_count(note)

    # --- BUS METHODS (DELEGATED) ---
    def get_active_buses(self) -> List: return self.bus_repo.get_active_buses()
    def get_bus(self, bus_id: str): return self.bus_repo.get_bus(bus_id)


# --- DEPENDENCY PROVIDER ---
def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """
    FastAPI dependency that provides a DatabaseService bound to the
    request's session.
    """
    yield DatabaseService(db_session=db)
