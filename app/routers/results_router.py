# /app/routers/results_router.py

"""
Results endpoints: the spreadsheet import for staff, the merged
assignment+exam view for students, and the per-course overview for staff.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from ..core.deps import get_current_active_user, require_roles
from ..db.models.user_model import User as UserModel
from ..models import results_model
from ..services import results_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.post(
    "/upload",
    response_model=results_model.ExamImportSummary,
    status_code=status.HTTP_201_CREATED,
    summary="Import Exam Results from a Spreadsheet"
)
async def upload_exam_results(
    file: Optional[UploadFile] = File(default=None, description="An .xlsx, .xls or .csv spreadsheet; the first worksheet is imported."),
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    """
    Returns 201 whenever the workbook is structurally valid, even if every
    row was rejected; row problems are listed in `errors`.
    """
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please upload a spreadsheet file.")
    try:
        return await results_service.import_exam_results_from_upload(file=file, uploader=current_user, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/me", response_model=results_model.StudentResults, summary="Get My Results")
def get_my_results(
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    return results_service.get_student_results(student_id=current_user.id, db=db)


@router.get("/teacher", response_model=results_model.TeacherResults, summary="Get Exam Results for My Courses")
def get_teacher_results(
    course_id: Optional[str] = Query(default=None, alias="courseId"),
    teacher_id: Optional[str] = Query(default=None, alias="teacherId"),
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    """`teacherId` is only honoured for admins."""
    return results_service.get_teacher_results(current_user, db, course_id=course_id, teacher_id=teacher_id)
