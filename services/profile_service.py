"""Profile store: timestamped assessment snapshots per user.

Each save validates the payload, computes a fresh assessment and appends a
snapshot. Reads return the latest snapshot or the history, newest first.
"""

from datetime import date, timezone
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from core.logger import get_logger
from core.repository import SnapshotRepository
from database import models
from schemas.nutrition_schema import (
    MacroBreakdown,
    MacroDetail,
    NutritionAssessment,
    ProfileHistoryResponse,
    ProfileSnapshotResponse,
)
from services.input_validator import validate_nutrition_input
from services.nutrition_calculator import (
    ENERGY_DENSITY,
    CalculatorConfig,
    compute_nutrition_assessment,
)

logger = get_logger("services.profile_service")


def snapshot_to_response(snapshot: models.NutritionProfileSnapshot) -> ProfileSnapshotResponse:
    """Convert a stored snapshot row into its API representation."""
    macros = MacroBreakdown(**{
        name: MacroDetail(
            grams=getattr(snapshot, f"{name}_grams"),
            kcal=getattr(snapshot, f"{name}_grams") * density,
            percent=getattr(snapshot, f"{name}_percent"),
        )
        for name, density in ENERGY_DENSITY.items()
    })
    return ProfileSnapshotResponse(
        id=snapshot.id,
        user_id=snapshot.user_id,
        weight_kg=snapshot.weight_kg,
        height_cm=snapshot.height_cm,
        age_years=snapshot.age_years,
        sex=snapshot.sex,
        activity_level=snapshot.activity_level,
        goal=snapshot.goal,
        assessment=NutritionAssessment(
            bmi=snapshot.bmi,
            bmi_classification=snapshot.bmi_classification,
            bmr=snapshot.bmr,
            maintenance_calories=snapshot.maintenance_calories,
            target_daily_calories=snapshot.target_daily_calories,
            macros=macros,
            bmr_formula=snapshot.bmr_formula,
            weight_loss_policy=snapshot.weight_loss_policy,
            macro_table=snapshot.macro_table,
        ),
        created_at=snapshot.created_at.replace(tzinfo=timezone.utc).isoformat(),
    )


class ProfileService:
    """Save and read assessment snapshots through a `SnapshotRepository`."""

    def __init__(self, session: Session, config: Optional[CalculatorConfig] = None):
        self.repository = SnapshotRepository(session)
        self.config = config or CalculatorConfig()

    def save_snapshot(
        self,
        user_id: str,
        payload: Union[BaseModel, Mapping[str, Any]],
        today: Optional[date] = None,
    ) -> ProfileSnapshotResponse:
        """Compute an assessment for `payload` and store it for `user_id`.

        Raises:
            ValidationError: If `user_id` is blank or the payload is invalid.
            DatabaseError: If the snapshot cannot be stored.
        """
        if not user_id or not user_id.strip():
            raise ValidationError("userId is required", field="userId", reason="missing")
        nutrition_input = validate_nutrition_input(payload, today=today)
        assessment = compute_nutrition_assessment(nutrition_input, self.config)

        snapshot = models.NutritionProfileSnapshot(
            user_id=user_id,
            weight_kg=nutrition_input.weight_kg,
            height_cm=nutrition_input.height_cm,
            age_years=nutrition_input.age_years,
            sex=nutrition_input.sex.value,
            activity_level=nutrition_input.activity_level.value,
            goal=nutrition_input.goal.value,
            bmi=assessment.bmi,
            bmi_classification=assessment.bmi_classification.value,
            bmr=assessment.bmr,
            maintenance_calories=assessment.maintenance_calories,
            target_daily_calories=assessment.target_daily_calories,
            protein_grams=assessment.macros.protein.grams,
            protein_percent=assessment.macros.protein.percent,
            carbs_grams=assessment.macros.carbs.grams,
            carbs_percent=assessment.macros.carbs.percent,
            fat_grams=assessment.macros.fat.grams,
            fat_percent=assessment.macros.fat.percent,
            bmr_formula=assessment.bmr_formula,
            weight_loss_policy=assessment.weight_loss_policy,
            macro_table=assessment.macro_table,
        )
        snapshot = self.repository.create(snapshot)
        logger.info("Snapshot %s stored for user %s", snapshot.id, user_id)
        return snapshot_to_response(snapshot)

    def latest(self, user_id: str) -> ProfileSnapshotResponse:
        """Return the newest snapshot for `user_id`.

        Raises:
            NotFoundError: If the user has no snapshots.
        """
        snapshot = self.repository.latest_for_user(user_id)
        if snapshot is None:
            raise NotFoundError("NutritionProfile", user_id)
        return snapshot_to_response(snapshot)

    def history(self, user_id: str, skip: int = 0, limit: int = 50) -> ProfileHistoryResponse:
        snapshots: List[ProfileSnapshotResponse] = [
            snapshot_to_response(s) for s in self.repository.history_for_user(user_id, skip=skip, limit=limit)
        ]
        return ProfileHistoryResponse(
            user_id=user_id,
            total=self.repository.count_for_user(user_id),
            snapshots=snapshots,
        )
