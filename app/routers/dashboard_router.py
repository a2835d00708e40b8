# /app/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends

# --- Service and Model Imports ---
from ..core.deps import get_current_active_user
from ..db.models.user_model import User as UserModel
from ..services import dashboard_service
from ..services.database_service import DatabaseService, get_db_service
from ..models.dashboard_model import DashboardSummary

# --- APIRouter Instance ---
router = APIRouter()

# --- Endpoint Definition ---
@router.get(
    "/summary",
    response_model=DashboardSummary,
    response_model_exclude_none=True,
    summary="Get Dashboard Summary",
    description="Retrieves the role-specific statistics for the dashboard home view."
)
def get_dashboard_summary(
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    """
    Thin router: resolve the user and the database facade, then delegate
    to the service layer.
    """
    return dashboard_service.get_summary_data(db=db, current_user=current_user)
