# /app/routers/achievements_router.py

from fastapi import APIRouter, Depends

from ..core.deps import get_current_active_user
from ..db.models.user_model import User as UserModel
from ..models.achievements_model import Achievements
from ..services import achievements_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=Achievements, summary="Get Badges and Leaderboard")
def get_achievements(
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    return achievements_service.get_achievements(student_id=current_user.id, db=db)
