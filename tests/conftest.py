"""Shared test setup.

Points the service at a throwaway SQLite file and log directory before any
application module reads its settings.
"""
import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="nutrition-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")

import pytest

from database import init_db


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    """Create the schema once for the whole test session."""
    init_db()


@pytest.fixture
def male_moderate():
    """Reference adult: 70 kg, 175 cm, 30 years, moderately active."""
    return {
        "weightKg": 70,
        "heightCm": 175,
        "ageYears": 30,
        "sex": "male",
        "activityLevel": "moderate",
        "goal": "maintain",
    }


@pytest.fixture
def female_sedentary():
    """Reference adult: 60 kg, 160 cm, 25 years, sedentary, losing weight."""
    return {
        "weightKg": 60,
        "heightCm": 160,
        "ageYears": 25,
        "sex": "female",
        "activityLevel": "sedentary",
        "goal": "loseWeight",
    }
