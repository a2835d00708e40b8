# /app/models/bus_model.py

from typing import List, Optional

from pydantic import BaseModel, Field


class Location(BaseModel):
    lat: float
    lng: float


class BusStop(BaseModel):
    name: str
    location: Optional[Location] = None
    order: int


class Bus(BaseModel):
    id: str
    routeNumber: str
    routeName: str
    stops: List[BusStop] = Field(default_factory=list)
    currentLocation: Optional[Location] = None
    nextStop: Optional[str] = None
    eta: Optional[int] = Field(default=None, description="Minutes until the next stop.")
    isActive: bool = True
