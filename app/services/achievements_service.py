# /app/services/achievements_service.py

"""
Gamification view: badges for the requesting student and a class-wide
leaderboard.

Nothing here is stored. Every call rescans all graded submissions, builds
one aggregate per student, ranks them and evaluates the badge rules
against the requester's aggregate.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from ..models.achievements_model import Achievements, Badge, LeaderboardEntry
from .database_service import DatabaseService
from .results_helpers.grading import first_date, percentage_of, round_half_up

LEADERBOARD_SIZE = 10
MEDALS = {1: "gold", 2: "silver", 3: "bronze"}

EXCELLENCE_AVERAGE = 90
CONSISTENCY_SUBMISSIONS = 5
TOP_SCORE_PERCENT = 100


@dataclass
class StudentAggregate:
    student_id: str
    name: str
    email: Optional[str] = None
    total_percent: float = 0.0
    total_score: float = 0.0
    total_possible: float = 0.0
    submissions: int = 0
    best_percent: float = 0.0
    latest_date: Optional[datetime] = None
    # course id -> {"subject": name, "percents": [...]}
    course_scores: Dict[str, Dict] = field(default_factory=dict)

    @property
    def average_percent(self) -> float:
        return self.total_percent / self.submissions if self.submissions else 0.0


@dataclass
class RankedStudent:
    rank: int
    aggregate: StudentAggregate


def initials_for(name: Optional[str]) -> str:
    if not name:
        return "U"
    return "".join(part[0] for part in name.split()).upper() or "U"


def aggregate_submissions(submissions: List) -> Dict[str, StudentAggregate]:
    """
    Folds graded submissions into per-student aggregates. The returned dict
    preserves first-seen order, which is the tie-break of last resort.
    """
    stats: Dict[str, StudentAggregate] = {}
    for submission in submissions:
        if submission.grade is None or not submission.student_id:
            continue

        assignment = submission.assignment
        points = assignment.points or 100
        student = submission.student

        aggregate = stats.get(submission.student_id)
        if aggregate is None:
            aggregate = StudentAggregate(
                student_id=submission.student_id,
                name=(student.name if student else None) or "Unknown",
                email=student.email if student else None,
            )
            stats[submission.student_id] = aggregate

        percent = percentage_of(submission.grade, points)
        aggregate.total_percent += percent
        aggregate.total_score += submission.grade
        aggregate.total_possible += points
        aggregate.submissions += 1
        aggregate.best_percent = max(aggregate.best_percent, percent)

        submitted = first_date(
            submission.graded_at, submission.submitted_at, assignment.updated_at, assignment.created_at
        )
        if submitted is not None and (aggregate.latest_date is None or submitted > aggregate.latest_date):
            aggregate.latest_date = submitted

        course = assignment.course
        if course is not None:
            course_bucket = aggregate.course_scores.setdefault(course.id, {"subject": course.name, "percents": []})
            course_bucket["percents"].append(percent)

    return stats


def rank_students(stats: Dict[str, StudentAggregate]) -> List[RankedStudent]:
    """Average descending, then submission count descending; ranks are positional."""
    ordered = sorted(stats.values(), key=lambda a: (-a.average_percent, -a.submissions))
    return [RankedStudent(rank=index + 1, aggregate=a) for index, a in enumerate(ordered)]


def build_badge(badge_id: str, name: str, description: str, icon: str, color: str,
                progress: float, earned_date: Optional[datetime]) -> Badge:
    return Badge(
        id=badge_id,
        name=name,
        description=description,
        icon=icon,
        color=color,
        progress=max(0, min(100, round_half_up(progress))),
        earnedDate=earned_date.date().isoformat() if earned_date else None,
    )


def evaluate_badges(current: Optional[StudentAggregate]) -> List[Badge]:
    average = current.average_percent if current else 0.0
    submissions = current.submissions if current else 0
    best = current.best_percent if current else 0.0
    latest = current.latest_date if current else None

    return [
        build_badge(
            "academic-excellence", "Academic Excellence",
            "Maintain an average score of 90% or higher.", "trophy", "blue",
            progress=average / EXCELLENCE_AVERAGE * 100,
            earned_date=latest if average >= EXCELLENCE_AVERAGE else None,
        ),
        build_badge(
            "consistent-performer", "Consistent Performer",
            "Complete at least 5 graded submissions.", "target", "purple",
            progress=submissions / CONSISTENCY_SUBMISSIONS * 100,
            earned_date=latest if submissions >= CONSISTENCY_SUBMISSIONS else None,
        ),
        build_badge(
            "top-score", "Top Score",
            "Achieve a perfect score on at least one assignment.", "star", "yellow",
            progress=best,
            earned_date=latest if best >= TOP_SCORE_PERCENT else None,
        ),
    ]


def build_achievements(student_id: str, submissions: List) -> Achievements:
    stats = aggregate_submissions(submissions)
    ranked = rank_students(stats)
    current = stats.get(student_id)

    badges = evaluate_badges(current)
    class_rank = next((r.rank for r in ranked if r.aggregate.student_id == student_id), None)

    leaderboard = [
        LeaderboardEntry(
            rank=r.rank,
            name=r.aggregate.name,
            initials=initials_for(r.aggregate.name),
            points=round_half_up(r.aggregate.average_percent),
            medal=MEDALS.get(r.rank),
            isCurrentUser=r.aggregate.student_id == student_id,
        )
        for r in ranked[:LEADERBOARD_SIZE]
    ]

    return Achievements(
        totalPoints=round_half_up(current.total_score) if current else 0,
        badgesEarned=sum(1 for b in badges if b.progress >= 100),
        classRank=class_rank,
        streakDays=current.submissions if current else 0,
        badges=badges,
        leaderboard=leaderboard,
    )


def get_achievements(student_id: str, db: DatabaseService) -> Achievements:
    return build_achievements(student_id, db.get_all_graded_submissions())
