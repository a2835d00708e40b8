# /app/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# Importing them here guarantees Base.metadata knows every table before
# `create_all` runs at startup (and in the test fixtures).

from .base_class import Base

from .models.user_model import User
from .models.course_models import Course, CourseResource, course_enrollments
from .models.assignment_models import Assignment, Submission
from .models.exam_result_models import ExamResult
from .models.attendance_models import Attendance
from .models.timetable_models import TimetableEntry
from .models.note_models import Note
from .models.bus_model import Bus
