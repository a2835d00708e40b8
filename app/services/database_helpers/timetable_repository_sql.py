# /app/services/database_helpers/timetable_repository_sql.py

from typing import Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from app.db.models.timetable_models import TimetableEntry


class TimetableRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_entries(self, course_ids: Optional[List[str]] = None, professor_id: Optional[str] = None) -> List[TimetableEntry]:
        """Unordered; the service sorts by weekday, which SQL cannot do by name."""
        query = self.db.query(TimetableEntry).options(
            joinedload(TimetableEntry.course), joinedload(TimetableEntry.professor)
        )
        if course_ids is not None:
            query = query.filter(TimetableEntry.course_id.in_(course_ids))
        if professor_id:
            query = query.filter(TimetableEntry.professor_id == professor_id)
        return query.all()

    def get_entry(self, entry_id: str) -> Optional[TimetableEntry]:
        return (
            self.db.query(TimetableEntry)
            .options(joinedload(TimetableEntry.course), joinedload(TimetableEntry.professor))
            .filter(TimetableEntry.id == entry_id)
            .first()
        )

    def add_entry(self, record: Dict) -> TimetableEntry:
        new_entry = TimetableEntry(**record)
        self.db.add(new_entry)
        self.db.commit()
        self.db.refresh(new_entry)
        return new_entry

    def update_entry(self, entry: TimetableEntry, data: Dict) -> TimetableEntry:
        for key, value in data.items():
            setattr(entry, key, value)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def delete_entry(self, entry: TimetableEntry) -> None:
        self.db.delete(entry)
        self.db.commit()
