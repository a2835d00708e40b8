# /app/models/note_model.py

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class NoteTag(str, Enum):
    IMPORTANT = "Important"
    EXAM = "Exam"
    REFERENCE = "Reference"
    ASSIGNMENT = "Assignment"


class Note(BaseModel):
    id: str
    title: str
    subject: str
    description: str
    authorId: str
    authorName: Optional[str] = None
    fileUrl: Optional[str] = None
    fileName: Optional[str] = None
    fileType: Optional[str] = None
    fileSize: Optional[int] = None
    courseId: Optional[str] = None
    courseName: Optional[str] = None
    pages: Optional[int] = None
    tag: NoteTag = NoteTag.REFERENCE
    downloadCount: int = 0
    createdAt: Optional[datetime] = None


class NoteDownload(BaseModel):
    fileUrl: str
    fileName: Optional[str] = None
