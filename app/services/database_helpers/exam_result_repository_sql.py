# /app/services/database_helpers/exam_result_repository_sql.py

"""
Raw SQLAlchemy queries for the ExamResult table. The natural key lookup
mirrors the functional unique index: both sides of the title comparison
go through the database's own `lower()`, so the lookup and the index always
agree on what counts as the same title.
"""

from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.db.models.exam_result_models import ExamResult


class ExamResultRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_by_natural_key(self, exam_title: str, course_id: str, student_id: str) -> Optional[ExamResult]:
        return (
            self.db.query(ExamResult)
            .filter(
                func.lower(ExamResult.exam_title) == func.lower(exam_title),
                ExamResult.course_id == course_id,
                ExamResult.student_id == student_id,
            )
            .first()
        )

    def add_result(self, record: Dict) -> ExamResult:
        new_result = ExamResult(**record)
        self.db.add(new_result)
        self.db.commit()
        self.db.refresh(new_result)
        return new_result

    def update_result(self, result: ExamResult, data: Dict) -> ExamResult:
        for key, value in data.items():
            setattr(result, key, value)
        self.db.commit()
        self.db.refresh(result)
        return result

    def get_results_for_student(self, student_id: str) -> List[ExamResult]:
        return (
            self.db.query(ExamResult)
            .options(joinedload(ExamResult.course), joinedload(ExamResult.uploader))
            .filter(ExamResult.student_id == student_id)
            .order_by(ExamResult.created_at)
            .all()
        )

    def get_results_for_courses(self, course_ids: List[str]) -> List[ExamResult]:
        if not course_ids:
            return []
        return (
            self.db.query(ExamResult)
            .options(
                joinedload(ExamResult.course),
                joinedload(ExamResult.student),
                joinedload(ExamResult.uploader),
            )
            .filter(ExamResult.course_id.in_(course_ids))
            .order_by(ExamResult.created_at)
            .all()
        )
