# /app/routers/auth_router.py

"""
Account endpoints for the portal: self-registration for students, teachers
and admins, the OAuth2 password flow that issues bearer tokens, and the
profile of whoever the token belongs to, which they may also edit.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

# --- Application-specific Imports ---
from ..core import security
from ..core.deps import get_current_active_user
from ..db.models.user_model import User as UserModel
from ..models.user_model import Token, User, UserCreate, UserUpdate
from ..services import user_service
from ..services.database_service import DatabaseService, get_db_service

# --- Router Initialization ---
router = APIRouter()


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: DatabaseService = Depends(get_db_service)
):
    """
    Handles new user registration. A duplicate email or student ID comes
    back from the service as a ValueError and is surfaced as a 400.
    """
    try:
        return user_service.create_user(db=db, user=user_in)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: DatabaseService = Depends(get_db_service)
):
    """
    OAuth2 password flow: the email goes in the form's `username` field.
    """
    user = user_service.authenticate_user(db, email=form_data.username, password=form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = security.create_access_token(subject=user.id)
    return Token(access_token=access_token, token_type="bearer")


@router.get("/me", response_model=User)
def read_current_user(
    current_user: UserModel = Depends(get_current_active_user)
):
    """Returns the profile of the authenticated user."""
    return current_user


@router.put("/me", response_model=User)
def update_current_user(
    profile: UserUpdate,
    db: DatabaseService = Depends(get_db_service),
    current_user: UserModel = Depends(get_current_active_user)
):
    try:
        return user_service.update_profile(db=db, user=current_user, profile=profile)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
