# /app/services/database_helpers/bus_repository_sql.py

from typing import List, Optional

from sqlalchemy.orm import Session

from app.db.models.bus_model import Bus


class BusRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_active_buses(self) -> List[Bus]:
        return self.db.query(Bus).filter(Bus.is_active.is_(True)).order_by(Bus.route_number).all()

    def get_bus(self, bus_id: str) -> Optional[Bus]:
        return self.db.query(Bus).filter(Bus.id == bus_id).first()
