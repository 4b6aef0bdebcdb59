"""Dependency helpers exposing DB sessions and calculator configuration."""

from core.config import get_settings
from services.nutrition_calculator import CalculatorConfig
from .database import get_session


def get_db():
    """Yield a DB session for FastAPI dependency injection."""
    yield from get_session()


def get_calculator_config() -> CalculatorConfig:
    """Resolve the configured calculator variants for a request."""
    return get_settings().calculator_config()
