# /app/core/deps.py

"""
FastAPI dependencies that resolve the authenticated user from a bearer
token and enforce role-based access at the router level.
"""

from typing import Callable

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from ..db.models.user_model import User
from ..services.database_service import DatabaseService, get_db_service
from . import security

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")

_credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Not authorized to access this route",
    headers={"WWW-Authenticate": "Bearer"},
)


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: DatabaseService = Depends(get_db_service),
) -> User:
    try:
        payload = security.decode_access_token(token)
    except jwt.PyJWTError:
        raise _credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise _credentials_exception

    user = db.get_user_by_id(user_id)
    if user is None:
        raise _credentials_exception
    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Inactive user")
    return current_user


def require_roles(*roles: str) -> Callable[..., User]:
    """
    Builds a dependency that only lets users with one of `roles` through.

    Usage: `current_user: User = Depends(require_roles("teacher", "admin"))`
    """
    def _checker(current_user: User = Depends(get_current_active_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"User role {current_user.role} is not authorized to access this route",
            )
        return current_user

    return _checker
