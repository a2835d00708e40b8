# /app/core/config.py

"""
Central runtime configuration for the Campus Portal backend.

Values are read once at import time from the process environment. A local
`.env` file, if present, is loaded first so developers can keep their
settings out of the shell.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./campus.db")

# --- Auth ---
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

# --- Uploads ---
# Submissions are kept here; result spreadsheets only pass through it.
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")

# --- HTTP ---
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
