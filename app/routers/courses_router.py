# /app/routers/courses_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..core.deps import get_current_active_user, require_roles
from ..db.models.user_model import User as UserModel
from ..models import course_model
from ..services import course_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


def _not_found(course_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Course not found with id of {course_id}")


# --- COURSE COLLECTION ENDPOINTS (/api/courses) ---

@router.get("", response_model=List[course_model.Course], summary="List Courses")
def list_courses(
    mine: bool = False,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    """`mine=true` restricts a teacher to the courses they own."""
    teacher_id = current_user.id if mine and current_user.role == "teacher" else None
    return course_service.list_courses(db=db, teacher_id=teacher_id)


@router.post("", response_model=course_model.Course, status_code=status.HTTP_201_CREATED, summary="Create a Course")
def create_course(
    course_create: course_model.CourseCreate,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        return course_service.create_course(course_data=course_create, db=db, current_user=current_user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

# --- INDIVIDUAL COURSE RESOURCE ENDPOINTS (/api/courses/{course_id}) ---

@router.get("/{course_id}", response_model=course_model.Course, summary="Get a Single Course")
def get_course(
    course_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    course = course_service.get_course_details(course_id=course_id, db=db)
    if course is None:
        raise _not_found(course_id)
    return course


@router.put("/{course_id}", response_model=course_model.Course, summary="Update a Course")
def update_course(
    course_id: str,
    course_update: course_model.CourseUpdate,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        course = course_service.update_course(course_id, course_update, db=db, current_user=current_user)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if course is None:
        raise _not_found(course_id)
    return course


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Course")
def delete_course(
    course_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        deleted = course_service.delete_course(course_id, db=db, current_user=current_user)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if not deleted:
        raise _not_found(course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{course_id}/enroll", response_model=course_model.Course, summary="Enroll in a Course")
def enroll_in_course(
    course_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("student"))
):
    try:
        course = course_service.enroll_student(course_id=course_id, student=current_user, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if course is None:
        raise _not_found(course_id)
    return course


@router.post(
    "/{course_id}/resources",
    response_model=course_model.Resource,
    status_code=status.HTTP_201_CREATED,
    summary="Add a Resource to a Course"
)
def add_resource(
    course_id: str,
    resource: course_model.ResourceCreate,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        new_resource = course_service.add_resource(course_id, resource, db=db, current_user=current_user)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if new_resource is None:
        raise _not_found(course_id)
    return new_resource
