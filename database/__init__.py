"""Database package: ORM models and session helpers."""

from .database import (
    engine,
    SessionLocal,
    init_db,
    get_session,
)
from . import models

__all__ = [
    "engine",
    "SessionLocal",
    "init_db",
    "get_session",
    "models",
]
