# /app/services/results_helpers/grading.py

"""
Shared arithmetic for every results read-path.

All percentages and averages in API responses go through `round_half_up`
so the student view, the teacher view and the leaderboard can never
disagree about how 84.45 is displayed. Precision by use:

- stored exam percentages ........ 2 decimals
- overall averages / table rows .. 1 decimal
- chart points / leaderboard ..... whole numbers
"""

import math
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

Number = Union[int, float]

EXAM_PERCENT_DIGITS = 2
TABLE_PERCENT_DIGITS = 1

GRADE_BOUNDARIES = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)
FAILING_GRADE = "F"


def round_half_up(value: Number, ndigits: int = 0) -> Union[int, float]:
    """
    Rounds half away from zero on the value's decimal representation.
    Returns an `int` when `ndigits` is 0.
    """
    quantum = Decimal(1).scaleb(-ndigits)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    if ndigits == 0:
        return int(rounded)
    return float(rounded)


def percentage_of(obtained: Number, total: Number) -> float:
    if not total or total <= 0:
        return 0.0
    return obtained / total * 100


def exam_percentage(marks_obtained: Number, total_marks: Number) -> float:
    return round_half_up(percentage_of(marks_obtained, total_marks), EXAM_PERCENT_DIGITS)


def letter_grade(percentage: Number) -> str:
    for boundary, grade in GRADE_BOUNDARIES:
        if percentage >= boundary:
            return grade
    return FAILING_GRADE


def is_finite_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; they were written as UTC.
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def first_date(*candidates: Optional[datetime]) -> Optional[datetime]:
    """Returns the first non-empty candidate, normalised to UTC."""
    for candidate in candidates:
        if candidate is not None:
            return as_utc(candidate)
    return None
