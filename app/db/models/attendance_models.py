# /app/db/models/attendance_models.py

"""
SQLAlchemy model for one student's attendance in one course on one day.
Marking the same student twice on the same day updates the existing row;
the unique constraint keeps that true even under concurrent requests.
"""

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..base_class import Base, utcnow


class Attendance(Base):
    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("student_id", "course_id", "date", name="uq_attendance_student_course_date"),
    )

    id = Column(String, primary_key=True, index=True)
    student_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    course_id = Column(String, ForeignKey("courses.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    # present | absent | late
    status = Column(String, nullable=False)
    marked_by = Column(String, ForeignKey("users.id"), nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    course = relationship("Course", back_populates="attendance_records")
    student = relationship("User", foreign_keys=[student_id])
    marker = relationship("User", foreign_keys=[marked_by])
