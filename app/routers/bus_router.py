# /app/routers/bus_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import get_current_active_user
from ..db.models.user_model import User as UserModel
from ..models import bus_model
from ..services import bus_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[bus_model.Bus], summary="List Active Buses")
def list_buses(
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    return bus_service.list_active_buses(db)


@router.get("/{bus_id}", response_model=bus_model.Bus, summary="Get a Single Bus")
def get_bus(
    bus_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    bus = bus_service.get_bus(bus_id, db)
    if bus is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Bus not found with id of {bus_id}")
    return bus
