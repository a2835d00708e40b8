# /app/db/models/user_model.py

"""
SQLAlchemy model for portal accounts. A single table holds students,
teachers and admins; `role` drives every authorization decision.
"""

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship

from ..base_class import Base, utcnow


class User(Base):
    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # Stored lower-cased so lookups from spreadsheets can match exactly.
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, default="student", index=True)
    department = Column(String, nullable=False)
    studentId = Column(String, unique=True, index=True, nullable=True)
    phone = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Courses this user teaches (role == "teacher").
    courses_taught = relationship("Course", back_populates="teacher")
    # Courses this user is enrolled in (role == "student").
    enrolled_courses = relationship("Course", secondary="course_enrollments", back_populates="students")
