# /app/services/attendance_service.py

"""
Business logic for class attendance: a student's own record with
per-subject statistics, the staff view of one course's register, bulk
marking, and the two Excel exports.

A "late" mark counts as half a class everywhere a percentage is shown.
Ownership follows the rest of the portal: teachers act on their own
courses only, admins on any; violations raise PermissionError and a
missing course comes back as None.
"""

import io
import logging
import uuid
from collections import OrderedDict
from datetime import date
from typing import Dict, Iterable, List, Optional

import pandas as pd

from ..db.models.user_model import User
from ..models import attendance_model
from .database_service import DatabaseService
from .results_helpers.grading import round_half_up

logger = logging.getLogger(__name__)

VALID_STATUSES = ("present", "absent", "late")
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# --- Arithmetic ---

def attendance_percentage(present: int, late: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return (present + late * 0.5) / total * 100


def count_statuses(records: Iterable) -> Dict[str, int]:
    counts = {"present": 0, "absent": 0, "late": 0, "total": 0}
    for record in records:
        counts[record.status] += 1
        counts["total"] += 1
    return counts


def _format_percent(value: float) -> str:
    return f"{round_half_up(value, 2):.2f}%"


# --- Serialisation ---

def record_to_dict(record) -> Dict:
    course = record.course
    student = record.student
    return {
        "id": record.id,
        "studentId": record.student_id,
        "studentName": student.name if student else None,
        "courseId": record.course_id,
        "courseName": course.name if course else None,
        "courseCode": course.code if course else None,
        "date": record.date,
        "status": record.status,
        "markedBy": record.marked_by,
    }


def summarize_student_records(records: List) -> attendance_model.StudentAttendance:
    """
    Builds the student view from records already ordered newest first.
    Subjects appear in the order their latest record appears.
    """
    by_course: "OrderedDict[str, list]" = OrderedDict()
    for record in records:
        by_course.setdefault(record.course_id, []).append(record)

    subject_wise = []
    for course_id, course_records in by_course.items():
        course = course_records[0].course
        counts = count_statuses(course_records)
        subject_wise.append(attendance_model.SubjectAttendance(
            courseId=course_id,
            name=course.name if course else course_id,
            code=course.code if course else "",
            present=counts["present"],
            late=counts["late"],
            absent=counts["absent"],
            total=counts["total"],
            percentage=round_half_up(attendance_percentage(counts["present"], counts["late"], counts["total"])),
        ))

    overall = count_statuses(records)
    return attendance_model.StudentAttendance(
        overall=round_half_up(attendance_percentage(overall["present"], overall["late"], overall["total"])),
        subjectWise=subject_wise,
        records=[record_to_dict(r) for r in records],
    )


# --- Read paths ---

def get_student_attendance(student_id: str, db: DatabaseService,
                           course_id: Optional[str] = None) -> attendance_model.StudentAttendance:
    return summarize_student_records(db.get_attendance_for_student(student_id, course_id=course_id))


def _ensure_course_owner(course, current_user: User, action: str) -> None:
    if current_user.role == "teacher" and course.teacher_id != current_user.id:
        raise PermissionError(f"Not authorized to {action} for this course")


def get_course_attendance(course_id: str, current_user: User, db: DatabaseService,
                          on_date: Optional[date] = None) -> Optional[attendance_model.CourseAttendance]:
    """
    The roster of a course plus, when `on_date` is given, what was marked
    that day. Without a date no records are returned; the register is
    always read one day at a time.
    """
    course = db.get_course_by_id(course_id)
    if course is None:
        return None
    _ensure_course_owner(course, current_user, "view attendance")

    students = sorted(course.students, key=lambda s: s.name)
    records = db.get_attendance_for_course(course.id, on_date=on_date) if on_date is not None else []
    return attendance_model.CourseAttendance(
        course=attendance_model.CourseRoster(
            id=course.id,
            name=course.name,
            code=course.code,
            students=[
                attendance_model.EnrolledStudent(id=s.id, name=s.name, email=s.email, studentId=s.studentId)
                for s in students
            ],
        ),
        date=on_date,
        records=[record_to_dict(r) for r in records],
    )


# --- Marking ---

def mark_bulk_attendance(request: attendance_model.BulkAttendanceRequest, current_user: User,
                         db: DatabaseService) -> Optional[attendance_model.BulkAttendanceResult]:
    """
    Saves a day's register for one course. Entries with an unknown status
    or for someone not enrolled in the course are skipped rather than
    failing the whole register. Marking a student twice for the same day
    overwrites the earlier status.
    """
    course = db.get_course_by_id(request.courseId)
    if course is None:
        return None
    _ensure_course_owner(course, current_user, "mark attendance")

    enrolled = {s.id for s in course.students}
    # Keyed by student so a repeated entry in one register keeps the last status.
    records: Dict[str, Dict] = {}
    for mark in request.attendanceData:
        status = mark.status.strip().lower()
        if status not in VALID_STATUSES:
            logger.warning("Skipping attendance for %s: unknown status %r", mark.studentId, mark.status)
            continue
        if mark.studentId not in enrolled:
            logger.warning("Skipping attendance for %s: not enrolled in %s", mark.studentId, course.id)
            continue
        records[mark.studentId] = {
            "id": f"att_{uuid.uuid4().hex[:12]}",
            "student_id": mark.studentId,
            "course_id": course.id,
            "date": request.date,
            "status": status,
            "marked_by": current_user.id,
        }

    saved = db.upsert_attendance(list(records.values())) if records else []
    logger.info("Marked %d attendance rows for course %s on %s", len(saved), course.id, request.date)
    return attendance_model.BulkAttendanceResult(
        count=len(saved),
        records=[record_to_dict(r) for r in saved],
    )


# --- Excel exports ---

def _workbook_bytes(sheets: List[tuple]) -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for sheet_name, df in sheets:
            df.to_excel(writer, sheet_name=sheet_name[:31], index=False)
    buffer.seek(0)
    return buffer.getvalue()


COURSE_SHEET_COLUMNS = ["USN", "Name", "Total Classes", "Present", "Absent", "Late", "Percentage"]


def export_faculty_attendance(current_user: User, db: DatabaseService) -> bytes:
    """
    One sheet per course (teachers: their own, admins: all) listing every
    enrolled student, then a Summary sheet with one column per course code
    and an Overall column. Overall averages only the subjects where the
    student has a non-zero percentage.
    """
    teacher_id = current_user.id if current_user.role == "teacher" else None
    courses = db.find_courses(teacher_id=teacher_id)
    records = db.get_attendance_for_courses([c.id for c in courses])

    by_course_student: Dict[tuple, list] = {}
    for record in records:
        by_course_student.setdefault((record.course_id, record.student_id), []).append(record)

    sheets = []
    summary: "OrderedDict[str, Dict]" = OrderedDict()
    for course in courses:
        rows = []
        for student in sorted(course.students, key=lambda s: s.name):
            counts = count_statuses(by_course_student.get((course.id, student.id), []))
            percentage = attendance_percentage(counts["present"], counts["late"], counts["total"])
            rows.append({
                "USN": student.studentId or "N/A",
                "Name": student.name,
                "Total Classes": counts["total"],
                "Present": counts["present"],
                "Absent": counts["absent"],
                "Late": counts["late"],
                "Percentage": _format_percent(percentage),
            })
            entry = summary.setdefault(student.id, {"usn": student.studentId or "N/A", "name": student.name, "subjects": {}})
            entry["subjects"][course.code] = round_half_up(percentage, 2)
        sheets.append((course.code, pd.DataFrame(rows, columns=COURSE_SHEET_COLUMNS)))

    codes = [c.code for c in courses]
    summary_rows = []
    for entry in summary.values():
        row = {"USN": entry["usn"], "Name": entry["name"]}
        taken = []
        for code in codes:
            if code in entry["subjects"]:
                row[code] = _format_percent(entry["subjects"][code])
                if entry["subjects"][code] > 0:
                    taken.append(entry["subjects"][code])
            else:
                row[code] = "-"
        row["Overall"] = _format_percent(sum(taken) / len(taken)) if taken else _format_percent(0)
        summary_rows.append(row)
    sheets.append(("Summary", pd.DataFrame(summary_rows, columns=["USN", "Name", *codes, "Overall"])))

    logger.info("Exported attendance for %d courses for %s", len(courses), current_user.id)
    return _workbook_bytes(sheets)


def export_student_attendance(student: User, db: DatabaseService) -> bytes:
    """A Summary sheet per subject plus every record on "Detailed Records", newest first."""
    view = summarize_student_records(db.get_attendance_for_student(student.id))

    summary_rows = [
        {
            "Subject": f"{s.code} - {s.name}",
            "Total Classes": s.total,
            "Present": s.present,
            "Absent": s.absent,
            "Late": s.late,
            "Percentage": f"{s.percentage}%",
        }
        for s in view.subjectWise
    ]
    detail_rows = [
        {
            "Date": r.date.isoformat(),
            "Subject": f"{r.courseCode} - {r.courseName}",
            "Status": r.status.capitalize(),
        }
        for r in view.records
    ]
    return _workbook_bytes([
        ("Summary", pd.DataFrame(summary_rows, columns=["Subject", "Total Classes", "Present", "Absent", "Late", "Percentage"])),
        ("Detailed Records", pd.DataFrame(detail_rows, columns=["Date", "Subject", "Status"])),
    ])


def faculty_export_filename(today: date) -> str:
    return f"Attendance_Report_{today.isoformat()}.xlsx"


def student_export_filename(student: User, today: date) -> str:
    return f"My_Attendance_{student.studentId or student.id}_{today.isoformat()}.xlsx"
