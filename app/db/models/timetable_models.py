# /app/db/models/timetable_models.py

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from ..base_class import Base, utcnow


class TimetableEntry(Base):
    __tablename__ = "timetable_entries"

    id = Column(String, primary_key=True, index=True)
    course_id = Column(String, ForeignKey("courses.id"), nullable=False, index=True)
    day = Column(String, nullable=False)
    # "HH:MM", 24-hour clock.
    start_time = Column(String, nullable=False)
    end_time = Column(String, nullable=False)
    room = Column(String, nullable=False)
    professor_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    course = relationship("Course", back_populates="timetable_entries")
    professor = relationship("User")
