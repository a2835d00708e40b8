# /app/core/security.py

"""
Cryptographic helpers for the authentication flow: password hashing and
JWT access-token issuing/decoding. Nothing in here touches the database.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from . import config

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(subject: Any, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issues a signed bearer token whose `sub` claim is the user's id.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {"sub": str(subject), "exp": expire}
    return jwt.encode(payload, config.SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decodes and verifies a token. Raises `jwt.PyJWTError` (including
    `ExpiredSignatureError`) when the token is invalid.
    """
    return jwt.decode(token, config.SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
