# /app/routers/timetable_router.py

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..core.deps import get_current_active_user, require_roles
from ..db.models.user_model import User as UserModel
from ..models import timetable_model
from ..services import timetable_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


def _not_found(entry_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Timetable entry not found with id of {entry_id}")


@router.get("", response_model=timetable_model.Timetable, summary="Get My Timetable")
def get_timetable(
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    return timetable_service.get_timetable(current_user, db=db)


@router.post("", response_model=timetable_model.TimetableEntry, status_code=status.HTTP_201_CREATED, summary="Add a Timetable Slot")
def create_timetable_entry(
    entry_create: timetable_model.TimetableEntryCreate,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        entry = timetable_service.create_entry(entry_create, current_user, db=db)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Course not found with id of {entry_create.courseId}")
    return entry


@router.put("/{entry_id}", response_model=timetable_model.TimetableEntry, summary="Update a Timetable Slot")
def update_timetable_entry(
    entry_id: str,
    entry_update: timetable_model.TimetableEntryUpdate,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        entry = timetable_service.update_entry(entry_id, entry_update, current_user, db=db)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if entry is None:
        raise _not_found(entry_id)
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Timetable Slot")
def delete_timetable_entry(
    entry_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(require_roles("teacher", "admin"))
):
    try:
        deleted = timetable_service.delete_entry(entry_id, current_user, db=db)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if not deleted:
        raise _not_found(entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
