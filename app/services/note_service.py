# /app/services/note_service.py

"""
Shared study notes: listing and lookup for everyone, uploads for staff,
and a download endpoint that counts how often each note is fetched.
"""

import logging
import uuid
from typing import Dict, List, Optional

from fastapi import UploadFile

from ..db.models.user_model import User
from ..models import note_model
from . import file_storage
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

ALL_SUBJECTS = "All"


def note_to_dict(note) -> Dict:
    author = note.author
    return {
        "id": note.id,
        "title": note.title,
        "subject": note.subject,
        "description": note.description,
        "authorId": note.author_id,
        "authorName": author.name if author else None,
        "fileUrl": note.file_url,
        "fileName": note.file_name,
        "fileType": note.file_type,
        "fileSize": note.file_size,
        "courseId": note.course_id,
        "courseName": note.course_name,
        "pages": note.pages,
        "tag": note.tag,
        "downloadCount": note.download_count,
        "createdAt": note.created_at,
    }


def list_notes(db: DatabaseService, subject: Optional[str] = None, course_id: Optional[str] = None) -> List[Dict]:
    """`subject="All"` is the same as no subject filter."""
    if subject == ALL_SUBJECTS:
        subject = None
    return [note_to_dict(n) for n in db.get_notes(subject=subject, course_id=course_id)]


def get_note(note_id: str, db: DatabaseService) -> Optional[Dict]:
    note = db.get_note(note_id)
    return note_to_dict(note) if note else None


async def create_note(
    title: str,
    file: Optional[UploadFile],
    author: User,
    db: DatabaseService,
    subject: Optional[str] = None,
    description: str = "",
    course_id: Optional[str] = None,
    tag: note_model.NoteTag = note_model.NoteTag.REFERENCE,
    pages: Optional[int] = None,
    upload_dir: Optional[str] = None,
) -> Optional[Dict]:
    """
    Stores the uploaded file and records the note. The subject defaults
    to the course name when a course is given. Returns None when the
    course does not exist.
    """
    course = None
    if course_id:
        course = db.get_course_by_id(course_id)
        if course is None:
            return None

    subject = (subject or "").strip() or (course.name if course else "")
    if not subject:
        raise ValueError("Please add a subject or choose a course.")
    if not title or not title.strip():
        raise ValueError("Please add a title.")
    if file is None:
        raise ValueError("Please upload a file for the note")

    file_fields = await file_storage.store_upload(
        file, upload_dir=upload_dir, empty_message="Please upload a file for the note"
    )
    record = {
        "id": f"nte_{uuid.uuid4().hex[:12]}",
        "title": title.strip(),
        "subject": subject,
        "description": description or "",
        "author_id": author.id,
        "course_id": course.id if course else None,
        "course_name": course.name if course else None,
        "pages": pages,
        "tag": tag.value,
        **file_fields,
    }
    new_note = db.add_note(record)
    logger.info("Note %s uploaded by %s", new_note.id, author.id)
    return note_to_dict(db.get_note(new_note.id))


def download_note(note_id: str, db: DatabaseService) -> Optional[Dict]:
    """
    Counts the download and returns where the file lives. Returns None for
    an unknown note; raises FileNotFoundError when the note has no file.
    """
    note = db.get_note(note_id)
    if note is None:
        return None
    if not note.file_url:
        raise FileNotFoundError("File not available for this note")
    note = db.increment_note_downloads(note)
    return {"fileUrl": note.file_url, "fileName": note.file_name}
