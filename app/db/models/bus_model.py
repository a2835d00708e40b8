# /app/db/models/bus_model.py

from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String

from ..base_class import Base, utcnow


class Bus(Base):
    __tablename__ = "buses"

    id = Column(String, primary_key=True, index=True)
    route_number = Column(String, unique=True, index=True, nullable=False)
    route_name = Column(String, nullable=False)
    # List of {"name", "location": {"lat", "lng"}, "order"}.
    stops = Column(JSON, nullable=False, default=list)
    # {"lat", "lng"} or null when the bus has not reported yet.
    current_location = Column(JSON, nullable=True)
    next_stop = Column(String, nullable=True)
    eta_minutes = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
