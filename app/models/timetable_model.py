# /app/models/timetable_model.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class Day(str, Enum):
    MONDAY = "Monday"; TUESDAY = "Tuesday"; WEDNESDAY = "Wednesday"; THURSDAY = "Thursday"
    FRIDAY = "Friday"; SATURDAY = "Saturday"; SUNDAY = "Sunday"


class TimetableEntryCreate(BaseModel):
    courseId: str = Field(..., min_length=1)
    day: Day
    startTime: str = Field(..., pattern=TIME_PATTERN, examples=["09:00"])
    endTime: str = Field(..., pattern=TIME_PATTERN, examples=["10:30"])
    room: str = Field(..., min_length=1)
    # Only honoured for admins; teachers always schedule themselves.
    professorId: Optional[str] = None

    @model_validator(mode="after")
    def check_order(self):
        if self.endTime <= self.startTime:
            raise ValueError("endTime must be after startTime")
        return self


class TimetableEntryUpdate(BaseModel):
    courseId: Optional[str] = None
    day: Optional[Day] = None
    startTime: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    endTime: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    room: Optional[str] = Field(default=None, min_length=1)
    professorId: Optional[str] = None


class TimetableEntry(BaseModel):
    id: str
    courseId: str
    courseName: Optional[str] = None
    courseCode: Optional[str] = None
    day: Day
    startTime: str
    endTime: str
    room: str
    professorId: str
    professorName: Optional[str] = None


class Timetable(BaseModel):
    """The caller's weekly timetable plus what is on right now and next today."""
    timetable: List[TimetableEntry] = Field(default_factory=list)
    currentClass: Optional[TimetableEntry] = None
    nextClass: Optional[TimetableEntry] = None
