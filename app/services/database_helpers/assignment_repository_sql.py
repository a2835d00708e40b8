# /app/services/database_helpers/assignment_repository_sql.py

"""
This module contains the raw SQLAlchemy queries for the Assignment and
Submission tables. Submissions are always read together with their parent
assignment (and its course and teacher) because every consumer needs the
assignment's point value and course to make sense of a grade.
"""

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from app.db.models.assignment_models import Assignment, Submission


class AssignmentRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Assignment Methods ---

    def add_assignment(self, record: Dict) -> Assignment:
        new_assignment = Assignment(**record)
        self.db.add(new_assignment)
        self.db.commit()
        self.db.refresh(new_assignment)
        return new_assignment

    def get_assignment(self, assignment_id: str) -> Optional[Assignment]:
        return (
            self.db.query(Assignment)
            .options(
                joinedload(Assignment.course),
                joinedload(Assignment.teacher),
                joinedload(Assignment.submissions).joinedload(Submission.student),
            )
            .filter(Assignment.id == assignment_id)
            .first()
        )

    def get_assignments(
        self,
        course_id: Optional[str] = None,
        teacher_id: Optional[str] = None,
        course_ids: Optional[List[str]] = None,
        due_after: Optional[datetime] = None,
        due_before: Optional[datetime] = None,
    ) -> List[Assignment]:
        query = self.db.query(Assignment).options(
            joinedload(Assignment.course), joinedload(Assignment.teacher)
        )
        if course_id:
            query = query.filter(Assignment.course_id == course_id)
        if teacher_id:
            query = query.filter(Assignment.teacher_id == teacher_id)
        if course_ids is not None:
            query = query.filter(Assignment.course_id.in_(course_ids))
        if due_after is not None:
            query = query.filter(Assignment.due_date >= due_after)
        if due_before is not None:
            query = query.filter(Assignment.due_date < due_before)
        return query.order_by(Assignment.due_date).all()

    def update_assignment(self, assignment: Assignment, data: Dict) -> Assignment:
        for key, value in data.items():
            setattr(assignment, key, value)
        self.db.commit()
        self.db.refresh(assignment)
        return assignment

    def delete_assignment(self, assignment: Assignment) -> None:
        """Submissions are removed by the relationship cascade."""
        self.db.delete(assignment)
        self.db.commit()

    def get_recent_assignments(self, teacher_id: Optional[str] = None, limit: int = 5) -> List[Assignment]:
        query = self.db.query(Assignment).options(joinedload(Assignment.course))
        if teacher_id:
            query = query.filter(Assignment.teacher_id == teacher_id)
        return query.order_by(Assignment.created_at.desc()).limit(limit).all()

    # --- Submission Methods ---

    def get_submission(self, assignment_id: str, submission_id: str) -> Optional[Submission]:
        return (
            self.db.query(Submission)
            .filter(Submission.assignment_id == assignment_id, Submission.id == submission_id)
            .first()
        )

    def get_submission_for_student(self, assignment_id: str, student_id: str) -> Optional[Submission]:
        return (
            self.db.query(Submission)
            .filter(Submission.assignment_id == assignment_id, Submission.student_id == student_id)
            .first()
        )

    def add_submission(self, record: Dict) -> Submission:
        new_submission = Submission(**record)
        self.db.add(new_submission)
        self.db.commit()
        self.db.refresh(new_submission)
        return new_submission

    def update_submission(self, submission: Submission, data: Dict) -> Submission:
        for key, value in data.items():
            setattr(submission, key, value)
        self.db.commit()
        self.db.refresh(submission)
        return submission

    def get_graded_submissions_for_student(self, student_id: str) -> List[Submission]:
        return (
            self.db.query(Submission)
            .join(Assignment, Submission.assignment_id == Assignment.id)
            .options(
                joinedload(Submission.assignment).joinedload(Assignment.course),
                joinedload(Submission.assignment).joinedload(Assignment.teacher),
                joinedload(Submission.grader),
            )
            .filter(Submission.student_id == student_id, Submission.grade.isnot(None))
            .order_by(Assignment.created_at, Submission.created_at)
            .all()
        )

    def get_all_graded_submissions(self) -> List[Submission]:
        """
        Every graded submission in the system, in assignment order and then
        submission order. The leaderboard relies on this order being stable.
        """
        return (
            self.db.query(Submission)
            .join(Assignment, Submission.assignment_id == Assignment.id)
            .options(
                joinedload(Submission.assignment).joinedload(Assignment.course),
                joinedload(Submission.student),
            )
            .filter(Submission.grade.isnot(None))
            .order_by(Assignment.created_at, Assignment.id, Submission.created_at, Submission.id)
            .all()
        )
