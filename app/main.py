# /app/main.py

# --- Core FastAPI Imports ---
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager

# --- Application-specific Router Imports ---
from .routers import (
    auth_router,
    courses_router,
    assignments_router,
    results_router,
    achievements_router,
    dashboard_router,
    attendance_router,
    timetable_router,
    notes_router,
    bus_router,
)

# --- Startup Helpers ---
from .core import config
from .core.error_handlers import add_error_handlers
from .core.logging_config import configure_logging
from .db.database import init_db

# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    configure_logging()
    init_db()
    yield

# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Campus Portal API",
    description="Courses, assignments, attendance, timetables, notes, exam results and achievements for the college portal.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_error_handlers(app)

# --- API Router Inclusion ---
app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(courses_router.router, prefix="/api/courses", tags=["Courses"])
app.include_router(assignments_router.router, prefix="/api/assignments", tags=["Assignments"])
app.include_router(results_router.router, prefix="/api/results", tags=["Results"])
app.include_router(achievements_router.router, prefix="/api/achievements", tags=["Achievements"])
app.include_router(attendance_router.router, prefix="/api/attendance", tags=["Attendance"])
app.include_router(timetable_router.router, prefix="/api/timetable", tags=["Timetable"])
app.include_router(notes_router.router, prefix="/api/notes", tags=["Notes"])
app.include_router(bus_router.router, prefix="/api/bus-tracking", tags=["Bus Tracking"])

# Uploaded submissions and notes are served back from their stored URL.
app.mount("/uploads", StaticFiles(directory=config.UPLOAD_DIR, check_dir=False), name="uploads")

# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Campus Portal backend is running!", "version": app.version}
