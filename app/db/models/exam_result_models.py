# /app/db/models/exam_result_models.py

"""
SQLAlchemy model for an externally uploaded exam mark. Rows are only
written by the spreadsheet importer, which upserts on the natural key
(exam title, course, student). The title part of that key is
case-insensitive, enforced by a functional unique index.
"""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, String, event, func
from sqlalchemy.orm import relationship

from ..base_class import Base, utcnow
from ...services.results_helpers.grading import exam_percentage


class ExamResult(Base):
    __tablename__ = "exam_results"

    id = Column(String, primary_key=True, index=True)
    exam_title = Column(String, nullable=False)
    exam_date = Column(DateTime(timezone=True), nullable=True)

    course_id = Column(String, ForeignKey("courses.id"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    marks_obtained = Column(Float, nullable=False)
    total_marks = Column(Float, nullable=False)
    percentage = Column(Float, nullable=True)
    grade = Column(String, nullable=True)

    term = Column(String, nullable=True)
    exam_type = Column(String, nullable=True)
    remarks = Column(String, nullable=True)

    uploaded_by = Column(String, ForeignKey("users.id"), nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    course = relationship("Course", back_populates="exam_results")
    student = relationship("User", foreign_keys=[student_id])
    uploader = relationship("User", foreign_keys=[uploaded_by])


Index(
    "uq_exam_result_title_course_student",
    func.lower(ExamResult.exam_title),
    ExamResult.course_id,
    ExamResult.student_id,
    unique=True,
)


@event.listens_for(ExamResult, "before_insert")
@event.listens_for(ExamResult, "before_update")
def _derive_percentage(mapper, connection, target: ExamResult) -> None:
    # percentage is derived on write when the caller did not set it.
    if target.percentage is None and target.total_marks and target.total_marks > 0:
        target.percentage = exam_percentage(target.marks_obtained, target.total_marks)
