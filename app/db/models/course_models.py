# /app/db/models/course_models.py

"""
SQLAlchemy models for a course, its student enrollment link table and the
study resources attached to it. A course is owned by exactly one teacher;
that ownership is what the result ingestion, attendance marking and
teacher result views check against.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Table
from sqlalchemy.orm import relationship

from ..base_class import Base, utcnow

course_enrollments = Table(
    "course_enrollments",
    Base.metadata,
    Column("course_id", String, ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("student_id", String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Course(Base):
    id = Column(String, primary_key=True, index=True)
    # Always stored upper-cased.
    code = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    credits = Column(Integer, nullable=False, default=1)
    department = Column(String, nullable=False)
    # List of {"day", "startTime", "endTime", "room"} slots.
    schedule = Column(JSON, nullable=False, default=list)

    teacher_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    teacher = relationship("User", back_populates="courses_taught")
    students = relationship("User", secondary=course_enrollments, back_populates="enrolled_courses")

    # Deleting a course takes everything that only makes sense inside it.
    assignments = relationship("Assignment", back_populates="course", cascade="all, delete-orphan")
    resources = relationship(
        "CourseResource",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="CourseResource.uploaded_at.desc()",
    )
    timetable_entries = relationship("TimetableEntry", back_populates="course", cascade="all, delete-orphan")
    attendance_records = relationship("Attendance", back_populates="course", cascade="all, delete-orphan")
    exam_results = relationship("ExamResult", back_populates="course", cascade="all, delete-orphan")
    # Notes outlive the course; their course_id is cleared instead.
    notes = relationship("Note", back_populates="course")


class CourseResource(Base):
    __tablename__ = "course_resources"

    id = Column(String, primary_key=True, index=True)
    course_id = Column(String, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    file_url = Column(String, nullable=False)
    file_type = Column(String, nullable=True)
    uploaded_by = Column(String, ForeignKey("users.id"), nullable=False)
    uploaded_at = Column(DateTime(timezone=True), default=utcnow)

    course = relationship("Course", back_populates="resources")
    uploader = relationship("User")
