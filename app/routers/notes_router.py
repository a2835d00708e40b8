# /app/routers/notes_router.py

"""
Shared notes. Any signed-in user can browse, download and upload; the
upload is a multipart form with the file plus the note's details.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status

from ..core.deps import get_current_active_user
from ..db.models.user_model import User as UserModel
from ..models import note_model
from ..services import note_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


def _not_found(note_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Note not found with id of {note_id}")


@router.get("", response_model=List[note_model.Note], summary="List Notes")
def list_notes(
    subject: Optional[str] = None,
    course_id: Optional[str] = Query(default=None, alias="courseId"),
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    """`subject=All` is treated as no filter."""
    return note_service.list_notes(db, subject=subject, course_id=course_id)


@router.post("", response_model=note_model.Note, status_code=status.HTTP_201_CREATED, summary="Upload a Note")
async def create_note(
    title: str = Form(...),
    subject: Optional[str] = Form(default=None),
    description: str = Form(default=""),
    course_id: Optional[str] = Form(default=None, alias="courseId"),
    tag: note_model.NoteTag = Form(default=note_model.NoteTag.REFERENCE),
    pages: Optional[int] = Form(default=None, ge=0),
    file: Optional[UploadFile] = File(default=None),
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    try:
        note = await note_service.create_note(
            title, file, current_user, db,
            subject=subject, description=description, course_id=course_id, tag=tag, pages=pages,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Selected course not found")
    return note


@router.get("/{note_id}", response_model=note_model.Note, summary="Get a Single Note")
def get_note(
    note_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    note = note_service.get_note(note_id, db)
    if note is None:
        raise _not_found(note_id)
    return note


@router.get("/{note_id}/download", response_model=note_model.NoteDownload, summary="Download a Note")
def download_note(
    note_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    try:
        download = note_service.download_note(note_id, db)
    except FileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if download is None:
        raise _not_found(note_id)
    return download
