# /app/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ..core import config

DATABASE_URL = config.DATABASE_URL

# The 'check_same_thread' argument is only needed for SQLite.
engine_args = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, **engine_args)

# Each instance of this class is a database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Creates any missing tables. Called once from the app lifespan."""
    from .base import Base
    Base.metadata.create_all(bind=engine)


# Dependency to get a DB session. This will be used in our API routers.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
