"""Database helpers: engine, session factory and DB initialization."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.config import get_settings
from .models import Base

DATABASE_URL = get_settings().database_url

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=_connect_args)

SessionLocal = sessionmaker(bind=engine)


def init_db():
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)


def get_session():
    """Yield a SQLAlchemy session for the request scope.

    Use this generator as a FastAPI dependency so the session is closed
    after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
