# /app/services/database_helpers/note_repository_sql.py

from typing import Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from app.db.models.note_models import Note


class NoteRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_notes(self, subject: Optional[str] = None, course_id: Optional[str] = None) -> List[Note]:
        """Grouped by course name and subject; newest first inside a group."""
        query = self.db.query(Note).options(joinedload(Note.author))
        if subject:
            query = query.filter(Note.subject == subject)
        if course_id:
            query = query.filter(Note.course_id == course_id)
        return query.order_by(Note.course_name, Note.subject, Note.created_at.desc()).all()

    def get_note(self, note_id: str) -> Optional[Note]:
        return self.db.query(Note).options(joinedload(Note.author)).filter(Note.id == note_id).first()

    def add_note(self, record: Dict) -> Note:
        new_note = Note(**record)
        self.db.add(new_note)
        self.db.commit()
        self.db.refresh(new_note)
        return new_note

    def increment_download_count(self, note: Note) -> Note:
        # Done in SQL so concurrent downloads are not lost.
        note.download_count = Note.download_count + 1
        self.db.commit()
        self.db.refresh(note)
        return note
