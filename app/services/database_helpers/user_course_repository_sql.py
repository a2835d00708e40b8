# /app/services/database_helpers/user_course_repository_sql.py

"""
This module contains the raw SQLAlchemy queries for the User and Course
tables, including the enrollment link between them. It is the direct
interface to the database for all account and course data.
"""

from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.db.models.course_models import Course, CourseResource, course_enrollments
from app.db.models.user_model import User


class UserCourseRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- User Methods ---

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Emails are stored lower-cased, so the lookup lower-cases too."""
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def get_student_by_email(self, email: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.email == email.strip().lower(), User.role == "student")
            .first()
        )

    def get_user_by_student_id(self, student_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.studentId == student_id).first()

    def add_user(self, record: Dict) -> User:
        new_user = User(**record)
        self.db.add(new_user)
        self.db.commit()
        self.db.refresh(new_user)
        return new_user

    def count_students(self) -> int:
        return self.db.query(func.count(User.id)).filter(User.role == "student").scalar() or 0

    def update_user(self, user: User, data: Dict) -> User:
        for key, value in data.items():
            setattr(user, key, value)
        self.db.commit()
        self.db.refresh(user)
        return user

    # --- Course Methods ---

    def get_all_courses(self, teacher_id: Optional[str] = None) -> List[Course]:
        query = self.db.query(Course).options(joinedload(Course.teacher))
        if teacher_id:
            query = query.filter(Course.teacher_id == teacher_id)
        return query.order_by(Course.created_at.desc()).all()

    def get_course_by_id(self, course_id: str) -> Optional[Course]:
        return (
            self.db.query(Course)
            .options(joinedload(Course.teacher), joinedload(Course.students))
            .filter(Course.id == course_id)
            .first()
        )

    def get_course_by_code(self, code: str) -> Optional[Course]:
        """Course codes are stored upper-cased, so the lookup upper-cases too."""
        return self.db.query(Course).filter(Course.code == code.strip().upper()).first()

    def add_course(self, record: Dict) -> Course:
        new_course = Course(**record)
        self.db.add(new_course)
        self.db.commit()
        self.db.refresh(new_course)
        return new_course

    def find_courses(self, teacher_id: Optional[str] = None, course_id: Optional[str] = None) -> List[Course]:
        """
        Scoped course lookup for the results views. With no filters every
        course is returned; callers decide whether that is allowed.
        """
        query = self.db.query(Course).options(joinedload(Course.teacher))
        if teacher_id:
            query = query.filter(Course.teacher_id == teacher_id)
        if course_id:
            query = query.filter(Course.id == course_id)
        return query.order_by(Course.code).all()

    def get_courses_for_student(self, student_id: str) -> List[Course]:
        return (
            self.db.query(Course)
            .join(course_enrollments, course_enrollments.c.course_id == Course.id)
            .filter(course_enrollments.c.student_id == student_id)
            .all()
        )

    def enroll_student(self, course: Course, student: User) -> Course:
        course.students.append(student)
        self.db.commit()
        self.db.refresh(course)
        return course

    def count_students_in_courses(self, course_ids: List[str]) -> int:
        if not course_ids:
            return 0
        return (
            self.db.query(func.count(func.distinct(course_enrollments.c.student_id)))
            .filter(course_enrollments.c.course_id.in_(course_ids))
            .scalar()
            or 0
        )

    def update_course(self, course: Course, data: Dict) -> Course:
        for key, value in data.items():
            setattr(course, key, value)
        self.db.commit()
        self.db.refresh(course)
        return course

    def delete_course(self, course: Course) -> None:
        """Assignments, resources, timetable slots, attendance and exam results go with it."""
        self.db.delete(course)
        self.db.commit()

    def add_resource(self, record: Dict) -> CourseResource:
        new_resource = CourseResource(**record)
        self.db.add(new_resource)
        self.db.commit()
        self.db.refresh(new_resource)
        return new_resource
