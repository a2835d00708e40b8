# /app/db/models/assignment_models.py

"""
SQLAlchemy models for `Assignment` and its `Submission` rows.

A submission is keyed by (assignment, student): the unique constraint
makes "one submission per student per assignment" a storage-level rule
rather than something the upload path has to remember to check.
"""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..base_class import Base, utcnow


class Assignment(Base):
    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    due_date = Column(DateTime(timezone=True), nullable=False)
    points = Column(Integer, nullable=False, default=100)

    course_id = Column(String, ForeignKey("courses.id"), nullable=False, index=True)
    teacher_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    course = relationship("Course", back_populates="assignments")
    teacher = relationship("User", foreign_keys=[teacher_id])
    # When an Assignment is deleted its submissions go with it.
    submissions = relationship(
        "Submission",
        back_populates="assignment",
        cascade="all, delete-orphan",
        order_by="Submission.created_at",
    )


class Submission(Base):
    __table_args__ = (
        UniqueConstraint("assignment_id", "student_id", name="uq_submission_assignment_student"),
    )

    id = Column(String, primary_key=True, index=True)
    assignment_id = Column(String, ForeignKey("assignments.id"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    submitted_at = Column(DateTime(timezone=True), default=utcnow)
    file_name = Column(String, nullable=True)
    file_url = Column(String, nullable=True)
    file_type = Column(String, nullable=True)
    file_size = Column(String, nullable=True)

    grade = Column(Float, nullable=True)
    feedback = Column(String, nullable=True)
    graded_at = Column(DateTime(timezone=True), nullable=True)
    graded_by = Column(String, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)

    assignment = relationship("Assignment", back_populates="submissions")
    student = relationship("User", foreign_keys=[student_id])
    grader = relationship("User", foreign_keys=[graded_by])
