# /app/services/bus_service.py

from typing import Dict, List, Optional

from .database_service import DatabaseService


def bus_to_dict(bus) -> Dict:
    return {
        "id": bus.id,
        "routeNumber": bus.route_number,
        "routeName": bus.route_name,
        "stops": sorted(bus.stops or [], key=lambda s: s.get("order", 0)),
        "currentLocation": bus.current_location,
        "nextStop": bus.next_stop,
        "eta": bus.eta_minutes,
        "isActive": bus.is_active,
    }


def list_active_buses(db: DatabaseService) -> List[Dict]:
    return [bus_to_dict(b) for b in db.get_active_buses()]


def get_bus(bus_id: str, db: DatabaseService) -> Optional[Dict]:
    bus = db.get_bus(bus_id)
    return bus_to_dict(bus) if bus else None
