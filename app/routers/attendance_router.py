# /app/routers/attendance_router.py

"""
Attendance endpoints. Everyone can read and export their own record;
reading a course register, bulk marking and the faculty export are for
teachers (own courses) and admins.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from ..core.deps import get_current_active_user, require_roles
from ..db.models.user_model import User as UserModel
from ..models import attendance_model
from ..services import attendance_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


def _excel_response(content: bytes, file_name: str) -> StreamingResponse:
    return StreamingResponse(
        iter([content]),
        media_type=attendance_service.EXCEL_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={file_name}"},
    )


# --- STUDENT ENDPOINTS ---

@router.get("", response_model=attendance_model.StudentAttendance, summary="Get My Attendance")
def get_my_attendance(
    course_id: Optional[str] = Query(default=None, alias="courseId"),
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    return attendance_service.get_student_attendance(current_user.id, db=db, course_id=course_id)


@router.get("/export/student", summary="Export My Attendance as Excel", response_class=StreamingResponse)
def export_my_attendance(
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    content = attendance_service.export_student_attendance(current_user, db=db)
    return _excel_response(content, attendance_service.student_export_filename(current_user, date.today()))


# --- FACULTY ENDPOINTS ---

@router.get("/course/{course_id}", response_model=attendance_model.CourseAttendance, summary="Get a Course Register")
def get_course_attendance(
    course_id: str,
    on_date: Optional[date] = Query(default=None, alias="date"),
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        attendance = attendance_service.get_course_attendance(course_id, current_user, db=db, on_date=on_date)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if attendance is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Course not found with id of {course_id}")
    return attendance


@router.post(
    "/mark-bulk",
    response_model=attendance_model.BulkAttendanceResult,
    status_code=status.HTTP_201_CREATED,
    summary="Mark Attendance for a Course"
)
def mark_bulk_attendance(
    request: attendance_model.BulkAttendanceRequest,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        result = attendance_service.mark_bulk_attendance(request, current_user, db=db)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Course not found with id of {request.courseId}")
    return result


@router.get("/export/faculty", summary="Export Attendance for My Courses as Excel", response_class=StreamingResponse)
def export_faculty_attendance(
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    content = attendance_service.export_faculty_attendance(current_user, db=db)
    return _excel_response(content, attendance_service.faculty_export_filename(date.today()))
