"""SQLAlchemy ORM models for the nutrition service.

Only assessment snapshots are persisted. Models stay behavior-free; the
numbers are produced by `services.nutrition_calculator`.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class NutritionProfileSnapshot(Base):
    """One timestamped assessment for a user.

    Rows are append-only: a new assessment never overwrites an older one,
    so the table doubles as the user's history.
    """

    __tablename__ = "nutrition_profile_snapshots"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    weight_kg = Column(Float, nullable=False)
    height_cm = Column(Float, nullable=False)
    age_years = Column(Integer, nullable=False)
    sex = Column(String, nullable=False)
    activity_level = Column(String, nullable=False)
    goal = Column(String, nullable=False)
    bmi = Column(Float, nullable=False)
    bmi_classification = Column(String, nullable=False)
    bmr = Column(Integer, nullable=False)
    maintenance_calories = Column(Integer, nullable=False)
    target_daily_calories = Column(Integer, nullable=False)
    protein_grams = Column(Integer, nullable=False)
    protein_percent = Column(Integer, nullable=False)
    carbs_grams = Column(Integer, nullable=False)
    carbs_percent = Column(Integer, nullable=False)
    fat_grams = Column(Integer, nullable=False)
    fat_percent = Column(Integer, nullable=False)
    bmr_formula = Column(String, nullable=False)
    weight_loss_policy = Column(String, nullable=False)
    macro_table = Column(String, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False, index=True)
