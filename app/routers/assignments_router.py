# /app/routers/assignments_router.py

"""
Assignment endpoints. Role gates live on the dependencies; ownership
checks happen in the service and come back as PermissionError.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status

from ..core.deps import get_current_active_user, require_roles
from ..db.models.user_model import User as UserModel
from ..models import assignment_model
from ..services import assignment_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


def _not_found(assignment_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Assignment not found with id of {assignment_id}")


@router.get("", response_model=List[assignment_model.Assignment], summary="List Assignments")
def list_assignments(
    course_id: Optional[str] = Query(default=None, alias="courseId"),
    due_status: Optional[Literal["upcoming", "past"]] = Query(default=None, alias="status"),
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    return assignment_service.list_assignments(db=db, current_user=current_user, course_id=course_id, status=due_status)


@router.post("", response_model=assignment_model.Assignment, status_code=status.HTTP_201_CREATED, summary="Create an Assignment")
def create_assignment(
    assignment_create: assignment_model.AssignmentCreate,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        assignment = assignment_service.create_assignment(assignment_create, db=db, current_user=current_user)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if assignment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Course not found with id of {assignment_create.courseId}")
    return assignment


@router.get("/{assignment_id}", response_model=assignment_model.Assignment, summary="Get a Single Assignment")
def get_assignment(
    assignment_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    try:
        assignment = assignment_service.get_assignment(assignment_id, db=db, current_user=current_user)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if assignment is None:
        raise _not_found(assignment_id)
    return assignment


@router.put("/{assignment_id}", response_model=assignment_model.Assignment, summary="Update an Assignment")
def update_assignment(
    assignment_id: str,
    assignment_update: assignment_model.AssignmentUpdate,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        assignment = assignment_service.update_assignment(assignment_id, assignment_update, db=db, current_user=current_user)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if assignment is None:
        raise _not_found(assignment_id)
    return assignment


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Assignment")
def delete_assignment(
    assignment_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        deleted = assignment_service.delete_assignment(assignment_id, db=db, current_user=current_user)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if not deleted:
        raise _not_found(assignment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{assignment_id}/submit", response_model=assignment_model.Assignment, summary="Submit an Assignment")
async def submit_assignment(
    assignment_id: str,
    file: UploadFile = File(...),
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("student"))
):
    try:
        assignment = await assignment_service.submit_assignment(assignment_id, file=file, db=db, student=current_user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if assignment is None:
        raise _not_found(assignment_id)
    return assignment


@router.put("/{assignment_id}/grade", response_model=assignment_model.Assignment, summary="Grade a Submission")
def grade_assignment(
    assignment_id: str,
    grade_request: assignment_model.GradeRequest,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        assignment = assignment_service.grade_submission(assignment_id, grade_request, db=db, current_user=current_user)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if assignment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Assignment or submission not found")
    return assignment
