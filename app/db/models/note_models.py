# /app/db/models/note_models.py

"""
SQLAlchemy model for a shared study note. `course_name` is copied from
the course when the note is created so the listing can still group notes
whose course was later deleted.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from ..base_class import Base, utcnow


class Note(Base):
    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    author_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    file_url = Column(String, nullable=True)
    file_name = Column(String, nullable=True)
    file_type = Column(String, nullable=True)
    file_size = Column(Integer, nullable=True)

    course_id = Column(String, ForeignKey("courses.id"), nullable=True, index=True)
    course_name = Column(String, nullable=True)
    pages = Column(Integer, nullable=True)
    tag = Column(String, nullable=False, default="Reference")
    download_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    author = relationship("User")
    course = relationship("Course", back_populates="notes")
