# /tests/conftest.py

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from openpyxl import Workbook
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base, Assignment, Attendance, Course, ExamResult, Submission, User
from app.services.database_service import DatabaseService

BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
RESULT_HEADERS = ["Student Email", "Course Code", "Exam Title", "Marks Obtained", "Total Marks"]


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database per test, shared across connections."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = Session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_service(session):
    return DatabaseService(db_session=session)


# --- Record factories ---

@pytest.fixture
def make_user(session):
    def _make(name="Alice Smith", email=None, role="student", department="Computer Science", studentId=None):
        user = User(
            id=f"usr_{uuid.uuid4().hex[:12]}",
            name=name,
            email=(email or f"{name.split()[0].lower()}.{uuid.uuid4().hex[:4]}@campus.edu").lower(),
            hashed_password="not-a-real-hash",
            role=role,
            department=department,
            studentId=studentId,
        )
        session.add(user)
        session.commit()
        return user
    return _make


@pytest.fixture
def make_course(session):
    def _make(teacher, code="CS101", name="Intro to Programming"):
        course = Course(
            id=f"crs_{uuid.uuid4().hex[:12]}",
            code=code.upper(),
            name=name,
            description="",
            credits=3,
            department="Computer Science",
            schedule=[{"day": "Monday", "startTime": "09:00", "endTime": "10:00", "room": "A1"}],
            teacher_id=teacher.id,
        )
        session.add(course)
        session.commit()
        return course
    return _make


@pytest.fixture
def make_assignment(session):
    counter = {"n": 0}

    def _make(course, title="Homework", points=100, created_at=None):
        counter["n"] += 1
        created = created_at or BASE_TIME + timedelta(minutes=counter["n"])
        assignment = Assignment(
            id=f"asg_{uuid.uuid4().hex[:12]}",
            title=title,
            description="",
            course_id=course.id,
            teacher_id=course.teacher_id,
            due_date=created + timedelta(days=7),
            points=points,
            created_at=created,
            updated_at=created,
        )
        session.add(assignment)
        session.commit()
        return assignment
    return _make


@pytest.fixture
def make_submission(session):
    counter = {"n": 0}

    def _make(assignment, student, grade=None, graded_at=None, submitted_at=None):
        counter["n"] += 1
        submitted = submitted_at or BASE_TIME + timedelta(hours=counter["n"])
        submission = Submission(
            id=f"sub_{uuid.uuid4().hex[:12]}",
            assignment_id=assignment.id,
            student_id=student.id,
            submitted_at=submitted,
            created_at=submitted,
            grade=grade,
            graded_at=graded_at,
        )
        session.add(submission)
        session.commit()
        return submission
    return _make


@pytest.fixture
def make_exam_result(session):
    def _make(course, student, uploader, title="Midterm", marks=45, total=50,
              percentage=None, grade=None, exam_date=None):
        result = ExamResult(
            id=f"exr_{uuid.uuid4().hex[:12]}",
            exam_title=title,
            exam_date=exam_date,
            course_id=course.id,
            student_id=student.id,
            marks_obtained=marks,
            total_marks=total,
            percentage=percentage,
            grade=grade,
            uploaded_by=uploader.id,
        )
        session.add(result)
        session.commit()
        return result
    return _make


@pytest.fixture
def enroll(session):
    def _enroll(course, *students):
        course.students.extend(students)
        session.commit()
        return course
    return _enroll


@pytest.fixture
def make_attendance(session):
    def _make(course, student, day, status="present", marker=None):
        record = Attendance(
            id=f"att_{uuid.uuid4().hex[:12]}",
            student_id=student.id,
            course_id=course.id,
            date=day,
            status=status,
            marked_by=marker.id if marker is not None else course.teacher_id,
        )
        session.add(record)
        session.commit()
        return record
    return _make


# --- Workbook helper ---

@pytest.fixture
def write_workbook(tmp_path):
    """Writes rows (header first) into a real .xlsx file and returns its path."""
    def _write(rows, filename="results.xlsx"):
        workbook = Workbook()
        sheet = workbook.active
        for row in rows:
            sheet.append(list(row))
        path = tmp_path / filename
        workbook.save(path)
        return str(path)
    return _write
