# /app/services/results_helpers/teacher_results.py

"""
Builds the staff-facing overview of uploaded exam results, grouped by
course.
"""

from typing import Dict, List, Optional, Set

from ...db.models.user_model import User
from ...models.results_model import (
    ResultMetadata,
    TeacherCourseResults,
    TeacherResultRow,
    TeacherResults,
    TeacherResultsSummary,
)
from ..database_service import DatabaseService
from .grading import (
    EXAM_PERCENT_DIGITS,
    as_utc,
    first_date,
    is_finite_number,
    letter_grade,
    percentage_of,
    round_half_up,
)


def resolve_courses(
    current_user: User,
    db: DatabaseService,
    course_id: Optional[str] = None,
    teacher_id: Optional[str] = None,
) -> List:
    """
    Teachers are always scoped to their own courses; `teacher_id` is only
    honoured for admins. An admin with no filters sees every course.
    """
    if current_user.role == "admin":
        return db.find_courses(teacher_id=teacher_id, course_id=course_id)
    return db.find_courses(teacher_id=current_user.id, course_id=course_id)


def _result_row(result) -> TeacherResultRow:
    student = result.student
    uploader = result.uploader
    if is_finite_number(result.percentage):
        percentage = result.percentage
    else:
        percentage = percentage_of(result.marks_obtained, result.total_marks)
    return TeacherResultRow(
        id=result.id,
        examTitle=result.exam_title,
        examDate=as_utc(result.exam_date),
        studentId=result.student_id,
        studentName=student.name if student else None,
        studentEmail=student.email if student else None,
        studentNumber=student.studentId if student else None,
        department=student.department if student else None,
        marksObtained=result.marks_obtained,
        totalMarks=result.total_marks,
        percentage=round_half_up(percentage, EXAM_PERCENT_DIGITS),
        grade=result.grade or letter_grade(percentage),
        metadata=ResultMetadata(term=result.term, examType=result.exam_type, remarks=result.remarks),
        uploadedBy=result.uploaded_by,
        uploadedByName=uploader.name if uploader else None,
        createdAt=as_utc(result.created_at),
        updatedAt=as_utc(result.updated_at),
    )


def _row_sort_key(row: TeacherResultRow):
    when = row.examDate or row.createdAt
    return (when is not None, when.timestamp() if when else 0)


def build_teacher_results(courses: List, results: List) -> TeacherResults:
    """Pure grouping/summary step over already fetched courses and results."""
    buckets: Dict[str, TeacherCourseResults] = {}
    course_students: Dict[str, Set[str]] = {}
    for course in courses:
        buckets[course.id] = TeacherCourseResults(
            courseId=course.id,
            courseName=course.name,
            courseCode=course.code,
            teacherName=course.teacher.name if course.teacher else None,
        )
        course_students[course.id] = set()

    all_students: Set[str] = set()
    total_records = 0
    last_import_at = None

    for result in results:
        bucket = buckets.get(result.course_id)
        if bucket is None:
            continue

        bucket.results.append(_result_row(result))
        course_students[result.course_id].add(result.student_id)
        all_students.add(result.student_id)
        total_records += 1

        touched = first_date(result.updated_at, result.created_at)
        if touched is not None and (last_import_at is None or touched > last_import_at):
            last_import_at = touched

    for course_id, bucket in buckets.items():
        bucket.results.sort(key=_row_sort_key, reverse=True)
        bucket.totalRecords = len(bucket.results)
        bucket.uniqueStudents = len(course_students[course_id])

    return TeacherResults(
        summary=TeacherResultsSummary(
            totalCourses=len(courses),
            totalRecords=total_records,
            uniqueStudents=len(all_students),
            lastImportAt=last_import_at,
        ),
        courses=list(buckets.values()),
    )


def get_teacher_results(
    current_user: User,
    db: DatabaseService,
    course_id: Optional[str] = None,
    teacher_id: Optional[str] = None,
) -> TeacherResults:
    courses = resolve_courses(current_user, db, course_id=course_id, teacher_id=teacher_id)
    if not courses:
        return TeacherResults()

    results = db.get_exam_results_for_courses([c.id for c in courses])
    return build_teacher_results(courses, results)
