# /app/services/results_service.py

"""
This service module is the business logic facade for everything under
/api/results. It orchestrates the specialist helpers in `results_helpers`
(spreadsheet ingestion, student and teacher aggregation) and owns the one
piece of file handling the importer needs: spooling the upload to a
temporary file that the importer deletes when it is done.
"""

import asyncio
import logging
import os
import tempfile
from typing import Optional

from fastapi import UploadFile

from ..core import config
from ..db.models.user_model import User
from ..models.results_model import ExamImportSummary, StudentResults, TeacherResults
from .database_service import DatabaseService
from .results_helpers import spreadsheet_ingestion, student_results, teacher_results

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".xlsx", ".xls", ".csv")


def _write_temp_file(file_bytes: bytes, extension: str, upload_dir: str) -> str:
    os.makedirs(upload_dir, exist_ok=True)
    handle, path = tempfile.mkstemp(prefix="results_", suffix=extension, dir=upload_dir)
    with os.fdopen(handle, "wb") as out:
        out.write(file_bytes)
    return path


async def save_upload_to_temp(file: UploadFile, upload_dir: Optional[str] = None) -> str:
    """Writes the uploaded bytes to a uniquely named file and returns its path."""
    upload_dir = upload_dir or config.UPLOAD_DIR
    filename = file.filename or ""
    extension = os.path.splitext(filename)[1].lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise ValueError(f"Please upload a spreadsheet ({', '.join(ALLOWED_EXTENSIONS)}).")

    file_bytes = await file.read()
    if not file_bytes:
        raise ValueError("The uploaded file is empty.")

    return await asyncio.to_thread(_write_temp_file, file_bytes, extension, upload_dir)


async def import_exam_results_from_upload(
    file: UploadFile,
    uploader: User,
    db: DatabaseService,
    upload_dir: Optional[str] = None,
) -> ExamImportSummary:
    """
    Spools the upload to disk and runs the importer on it in a worker
    thread, since pandas parsing and the per-row commits are blocking. The
    importer removes the temporary file on every exit path.
    """
    path = await save_upload_to_temp(file, upload_dir=upload_dir)
    logger.info("Importing exam results from %s uploaded by %s", file.filename, uploader.id)
    return await asyncio.to_thread(spreadsheet_ingestion.import_exam_results, path, uploader, db)


def get_student_results(student_id: str, db: DatabaseService) -> StudentResults:
    return student_results.get_student_results(student_id, db)


def get_teacher_results(
    current_user: User,
    db: DatabaseService,
    course_id: Optional[str] = None,
    teacher_id: Optional[str] = None,
) -> TeacherResults:
    return teacher_results.get_teacher_results(current_user, db, course_id=course_id, teacher_id=teacher_id)
