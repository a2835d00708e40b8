# /app/services/results_helpers/student_results.py

"""
Builds a student's "My Results" view by merging graded assignment
submissions and uploaded exam results into one list of records.
"""

from typing import Dict, List

from ...models.results_model import (
    HighestScore,
    RecentPoint,
    ResultMetadata,
    ResultRecord,
    StudentResults,
    SubjectScore,
)
from ..database_service import DatabaseService
from .grading import (
    TABLE_PERCENT_DIGITS,
    first_date,
    is_finite_number,
    letter_grade,
    percentage_of,
    round_half_up,
)

RECENT_PERFORMANCE_SIZE = 6


def _record_from_submission(submission) -> ResultRecord:
    assignment = submission.assignment
    course = assignment.course
    points = assignment.points or 100
    person = submission.grader or assignment.teacher
    return ResultRecord(
        id=submission.id,
        type="assignment",
        title=assignment.title,
        courseName=course.name if course else "Course",
        courseCode=course.code if course else "",
        courseId=course.id if course else None,
        personName=person.name if person else None,
        personEmail=person.email if person else None,
        marksObtained=submission.grade,
        totalMarks=points,
        percentage=percentage_of(submission.grade, points),
        date=first_date(
            submission.graded_at, submission.submitted_at, assignment.updated_at, assignment.created_at
        ),
        metadata=ResultMetadata(feedback=submission.feedback),
    )


def _record_from_exam(result) -> ResultRecord:
    course = result.course
    uploader = result.uploader
    if is_finite_number(result.percentage):
        percentage = result.percentage
    else:
        percentage = percentage_of(result.marks_obtained, result.total_marks)
    return ResultRecord(
        id=result.id,
        type="exam",
        title=result.exam_title,
        courseName=course.name if course else "Course",
        courseCode=course.code if course else "",
        courseId=course.id if course else None,
        personName=uploader.name if uploader else None,
        personEmail=uploader.email if uploader else None,
        marksObtained=result.marks_obtained,
        totalMarks=result.total_marks,
        percentage=percentage,
        date=first_date(result.exam_date, result.updated_at, result.created_at),
        metadata=ResultMetadata(term=result.term, examType=result.exam_type, remarks=result.remarks),
    )


def collect_records(student_id: str, db: DatabaseService) -> List[ResultRecord]:
    """All graded records for the student: assignments first, then exams."""
    records = [_record_from_submission(s) for s in db.get_graded_submissions_for_student(student_id)]
    records.extend(_record_from_exam(r) for r in db.get_exam_results_for_student(student_id))
    return records


def _sort_key(record: ResultRecord):
    # Undated records sort last when ordering newest-first.
    return (record.date is not None, record.date.timestamp() if record.date else 0)


def _chart_label(record: ResultRecord) -> str:
    if record.date is None:
        return record.title
    return f"{record.date.strftime('%b')} {record.date.day}"


def summarize_records(records: List[ResultRecord]) -> StudentResults:
    """
    Pure aggregation over already normalised records. Kept apart from the
    database access so it can be tested with hand-made records.
    """
    if not records:
        return StudentResults()

    total_percent = 0.0
    highest = None
    subjects: Dict[str, Dict] = {}
    distribution = {"A": 0, "B": 0, "C": 0, "D": 0, "F": 0}

    for record in records:
        total_percent += record.percentage

        # Strict '>' keeps the earliest record on ties.
        if highest is None or record.percentage > highest.percentage:
            highest = record

        if record.courseId:
            bucket = subjects.setdefault(
                record.courseId,
                {"subject": record.courseName, "courseCode": record.courseCode, "percentages": []},
            )
            bucket["percentages"].append(record.percentage)

        distribution[letter_grade(record.percentage)] += 1

    newest_first = sorted(records, key=_sort_key, reverse=True)

    recent = [
        RecentPoint(label=_chart_label(r), percentage=round_half_up(r.percentage))
        for r in newest_first[:RECENT_PERFORMANCE_SIZE]
    ]
    recent.reverse()

    table_rows = [
        r.model_copy(update={"percentage": round_half_up(r.percentage, TABLE_PERCENT_DIGITS)})
        for r in newest_first
    ]

    return StudentResults(
        overallAverage=round_half_up(total_percent / len(records), TABLE_PERCENT_DIGITS),
        totalGraded=len(records),
        highestScore=HighestScore(
            percentage=round_half_up(highest.percentage, TABLE_PERCENT_DIGITS),
            title=highest.title,
            courseName=highest.courseName,
            type=highest.type,
        ),
        subjectWise=[
            SubjectScore(
                courseId=course_id,
                subject=bucket["subject"],
                courseCode=bucket["courseCode"],
                score=round_half_up(sum(bucket["percentages"]) / len(bucket["percentages"])),
            )
            for course_id, bucket in subjects.items()
        ],
        assignments=table_rows,
        recentPerformance=recent,
        gradeDistribution=distribution,
    )


def get_student_results(student_id: str, db: DatabaseService) -> StudentResults:
    return summarize_records(collect_records(student_id, db))
