# /app/services/results_helpers/spreadsheet_ingestion.py

"""
Bulk import of exam marks from an uploaded spreadsheet.

The first worksheet is read with pandas, its header row is matched against
the fixed column names below, and every data row is validated on its own.
A bad row never aborts the batch: it is counted as skipped and reported
back with its spreadsheet row number, so the uploader can fix the file and
upload it again. Valid rows are upserted on (exam title, course, student),
which makes re-uploading the same file idempotent.
"""

import logging
import math
import os
import re
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional

import pandas as pd
from sqlalchemy.exc import IntegrityError

from ...db.models.user_model import User
from ...models.results_model import ExamImportError, ExamImportSummary
from ..database_service import DatabaseService
from .grading import exam_percentage, letter_grade

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("student email", "course code", "exam title", "marks obtained", "total marks")
OPTIONAL_COLUMNS = ("exam date", "term", "exam type", "remarks")

# Day zero of the spreadsheet serial-date system (with the 1900 leap-year bug baked in).
SPREADSHEET_EPOCH = datetime(1899, 12, 30, tzinfo=timezone.utc)

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_SERIAL_TEXT = re.compile(r"^\d+(\.\d+)?$")


class RowValidationError(ValueError):
    """A single row failed validation; the batch carries on."""


@dataclass
class ParsedRow:
    row_number: int
    student_email: str
    course_code: str
    exam_title: str
    marks_obtained_raw: str
    total_marks_raw: str
    marks_obtained: Optional[float]
    total_marks: Optional[float]
    exam_date: Optional[datetime]
    term: Optional[str]
    exam_type: Optional[str]
    remarks: Optional[str]

    def is_blank(self) -> bool:
        return not any((
            self.student_email, self.course_code, self.exam_title,
            self.marks_obtained_raw, self.total_marks_raw,
        ))


# --- Cell normalisation ---

def _is_missing(value) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def normalize_text(value) -> str:
    """Turns any cell into a trimmed string; empty cells become ''."""
    if _is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value).strip()


def parse_number(value) -> Optional[float]:
    """
    Native numbers pass through when finite. Anything else is stringified
    and stripped of every character except digits, '.' and '-'.
    """
    if _is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None

    cleaned = _NON_NUMERIC.sub("", str(value))
    if not cleaned:
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _from_serial(serial: Optional[float]) -> Optional[datetime]:
    if serial is None or not math.isfinite(serial):
        return None
    try:
        return SPREADSHEET_EPOCH + timedelta(milliseconds=serial * 86400000)
    except OverflowError:
        return None


def parse_date(value) -> Optional[datetime]:
    """
    Tries, in order: a native date value, a spreadsheet serial number, and
    generic string parsing. The first one that works wins.
    """
    if _is_missing(value) or isinstance(value, bool):
        return None

    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, (int, float)):
        return _from_serial(value)

    text = str(value).strip()
    if not text:
        return None
    # CSV cells arrive as text, so "45000" is still a serial date.
    if _SERIAL_TEXT.match(text):
        serial = _from_serial(parse_number(text))
        if serial is not None:
            return serial
    try:
        parsed = pd.to_datetime(text)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    parsed = parsed.to_pydatetime()
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


# --- Workbook reading ---

def read_first_sheet(file_path: str) -> pd.DataFrame:
    """
    Loads the first worksheet as raw cells (no header inference, no dtype
    coercion). CSV files are treated as a single-sheet workbook.
    """
    try:
        if file_path.lower().endswith(".csv"):
            return pd.read_csv(file_path, header=None, dtype=object, keep_default_na=False, skip_blank_lines=False)
        sheets = pd.read_excel(file_path, sheet_name=None, header=None, dtype=object)
    except pd.errors.EmptyDataError:
        raise ValueError(f"Missing required columns: {', '.join(REQUIRED_COLUMNS)}")
    except Exception as e:
        raise ValueError(f"Could not read the uploaded file as a spreadsheet: {e}") from e

    if not sheets:
        raise ValueError("The uploaded workbook does not contain any worksheets.")
    return next(iter(sheets.values()))


def map_header(header_cells: List) -> Dict[str, int]:
    """
    Maps each recognised column name to its position. Matching is
    case-insensitive; the first occurrence of a duplicated name wins.
    Raises ValueError naming every missing required column.
    """
    positions: Dict[str, int] = {}
    for index, cell in enumerate(header_cells):
        name = normalize_text(cell).lower()
        if name and name not in positions:
            positions[name] = index

    missing = [column for column in REQUIRED_COLUMNS if column not in positions]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")

    return {column: positions[column] for column in REQUIRED_COLUMNS + OPTIONAL_COLUMNS if column in positions}


def parse_row(cells: List, columns: Dict[str, int], row_number: int) -> ParsedRow:
    def cell(name: str):
        index = columns.get(name)
        if index is None or index >= len(cells):
            return None
        return cells[index]

    def optional_text(name: str) -> Optional[str]:
        return normalize_text(cell(name)) or None

    return ParsedRow(
        row_number=row_number,
        student_email=normalize_text(cell("student email")),
        course_code=normalize_text(cell("course code")),
        exam_title=normalize_text(cell("exam title")),
        marks_obtained_raw=normalize_text(cell("marks obtained")),
        total_marks_raw=normalize_text(cell("total marks")),
        marks_obtained=parse_number(cell("marks obtained")),
        total_marks=parse_number(cell("total marks")),
        exam_date=parse_date(cell("exam date")),
        term=optional_text("term"),
        exam_type=optional_text("exam type"),
        remarks=optional_text("remarks"),
    )


# --- Row validation & persistence ---

def _validate_row(row: ParsedRow, uploader: User, db: DatabaseService):
    """Returns (student, course) or raises RowValidationError."""
    if not row.student_email or not row.course_code or not row.exam_title:
        raise RowValidationError("Row is missing a student email, course code, or exam title.")

    student = db.get_student_by_email(row.student_email.lower())
    if student is None:
        raise RowValidationError(f"Student with email {row.student_email} was not found.")

    course = db.get_course_by_code(row.course_code.upper())
    if course is None:
        raise RowValidationError(f"Course with code {row.course_code} was not found.")

    if uploader.role == "teacher" and course.teacher_id != uploader.id:
        raise RowValidationError("You are not assigned to this course.")

    if row.marks_obtained is None or row.total_marks is None:
        raise RowValidationError("Marks obtained and total marks must be numbers.")

    if row.total_marks <= 0 or row.marks_obtained < 0 or row.marks_obtained > row.total_marks:
        raise RowValidationError(
            "Marks must be within a valid range: 0 <= marks obtained <= total marks, and total marks > 0."
        )

    return student, course


def _upsert_exam_result(row: ParsedRow, student: User, course, uploader: User, db: DatabaseService) -> bool:
    """Writes the row. Returns True when a new record was created."""
    percentage = exam_percentage(row.marks_obtained, row.total_marks)
    values = {
        "exam_title": row.exam_title,
        "marks_obtained": row.marks_obtained,
        "total_marks": row.total_marks,
        "percentage": percentage,
        "grade": letter_grade(percentage),
        "term": row.term,
        "exam_type": row.exam_type,
        "remarks": row.remarks,
        "uploaded_by": uploader.id,
    }
    if row.exam_date is not None:
        values["exam_date"] = row.exam_date

    existing = db.find_exam_result(row.exam_title, course.id, student.id)
    if existing is not None:
        db.update_exam_result(existing, values)
        return False

    values.update({
        "id": f"exr_{uuid.uuid4().hex[:12]}",
        "course_id": course.id,
        "student_id": student.id,
    })
    db.add_exam_result(values)
    return True


def ingest_dataframe(sheet: pd.DataFrame, uploader: User, db: DatabaseService) -> ExamImportSummary:
    """Runs header mapping and the per-row loop over an already loaded sheet."""
    if sheet.empty:
        raise ValueError(f"Missing required columns: {', '.join(REQUIRED_COLUMNS)}")

    rows = sheet.values.tolist()
    columns = map_header(rows[0])
    summary = ExamImportSummary()

    for offset, cells in enumerate(rows[1:]):
        row = parse_row(cells, columns, row_number=offset + 2)
        if row.is_blank():
            continue

        summary.processed += 1
        try:
            student, course = _validate_row(row, uploader, db)
            if _upsert_exam_result(row, student, course, uploader, db):
                summary.created += 1
            else:
                summary.updated += 1
        except RowValidationError as e:
            logger.debug("Row %d rejected: %s", row.row_number, e)
            summary.skipped += 1
            summary.errors.append(ExamImportError(row=row.row_number, message=str(e)))
        except IntegrityError:
            # A concurrent upload created the same key between our read and write.
            db.rollback()
            logger.warning("Row %d lost an upsert race and was skipped", row.row_number)
            summary.skipped += 1
            summary.errors.append(ExamImportError(
                row=row.row_number,
                message="A result for this exam, course, and student was saved concurrently. Please retry.",
            ))

    return summary


def import_exam_results(file_path: str, uploader: User, db: DatabaseService) -> ExamImportSummary:
    """
    Imports an exam-results workbook and always deletes the file afterwards.

    Structural problems (no worksheet, missing required columns) raise
    ValueError and nothing is written. Row problems are collected in the
    returned summary.
    """
    try:
        sheet = read_first_sheet(file_path)
        summary = ingest_dataframe(sheet, uploader, db)
        logger.info(
            "Exam results imported by %s: processed=%d created=%d updated=%d skipped=%d",
            uploader.id, summary.processed, summary.created, summary.updated, summary.skipped,
        )
        return summary
    finally:
        try:
            os.remove(file_path)
        except OSError as e:
            logger.warning("Could not delete uploaded file %s: %s", file_path, e)
