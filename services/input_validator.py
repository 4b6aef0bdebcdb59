"""Input validation for nutrition assessments.

Normalizes a raw payload (a mapping or a `NutritionAssessmentRequest`) into
a `NutritionInput`, accepting the localized field names and values sent by
existing callers. The first invalid field is reported as a
`ValidationError`, checked in the order heightCm, weightKg, ageYears, sex,
activityLevel, goal.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from core.exceptions import ValidationError
from core.logger import get_logger
from schemas.nutrition_schema import (
    ActivityLevel,
    Goal,
    NutritionAssessmentRequest,
    ProfileSnapshotRequest,
    Sex,
)

logger = get_logger("services.input_validator")

MAX_WEIGHT_KG = 300
MAX_HEIGHT_CM = 250
MAX_AGE_YEARS = 120

SEX_ALIASES = {
    "male": Sex.MALE,
    "m": Sex.MALE,
    "masculino": Sex.MALE,
    "female": Sex.FEMALE,
    "f": Sex.FEMALE,
    "feminino": Sex.FEMALE,
}

ACTIVITY_ALIASES = {
    "sedentary": ActivityLevel.SEDENTARY,
    "sedentarismo": ActivityLevel.SEDENTARY,
    "sedentario": ActivityLevel.SEDENTARY,
    "light": ActivityLevel.LIGHT,
    "lightly_active": ActivityLevel.LIGHT,
    "leve": ActivityLevel.LIGHT,
    "moderate": ActivityLevel.MODERATE,
    "moderately_active": ActivityLevel.MODERATE,
    "moderada": ActivityLevel.MODERATE,
    "moderado": ActivityLevel.MODERATE,
    "intense": ActivityLevel.INTENSE,
    "very_active": ActivityLevel.INTENSE,
    "alta": ActivityLevel.INTENSE,
    "alto": ActivityLevel.INTENSE,
    "intenso": ActivityLevel.INTENSE,
    "veryintense": ActivityLevel.VERY_INTENSE,
    "very_intense": ActivityLevel.VERY_INTENSE,
    "extremely_active": ActivityLevel.VERY_INTENSE,
    "muito_alta": ActivityLevel.VERY_INTENSE,
    "muito_intenso": ActivityLevel.VERY_INTENSE,
}

GOAL_ALIASES = {
    "loseweight": Goal.LOSE_WEIGHT,
    "lose_weight": Goal.LOSE_WEIGHT,
    "weight_loss": Goal.LOSE_WEIGHT,
    "perda_peso": Goal.LOSE_WEIGHT,
    "perder_peso": Goal.LOSE_WEIGHT,
    "gainmuscle": Goal.GAIN_MUSCLE,
    "gain_muscle": Goal.GAIN_MUSCLE,
    "muscle_gain": Goal.GAIN_MUSCLE,
    "ganho_massa": Goal.GAIN_MUSCLE,
    "ganhar_massa": Goal.GAIN_MUSCLE,
    "maintain": Goal.MAINTAIN,
    "manutencao": Goal.MAINTAIN,
    "manter_peso": Goal.MAINTAIN,
    "generalhealth": Goal.GENERAL_HEALTH,
    "general_health": Goal.GENERAL_HEALTH,
    "saude_geral": Goal.GENERAL_HEALTH,
}


@dataclass(frozen=True)
class NutritionInput:
    """Validated calculator input."""

    weight_kg: float
    height_cm: float
    age_years: int
    sex: Sex
    activity_level: ActivityLevel
    goal: Goal


def _to_request(data: Union[BaseModel, Mapping[str, Any]]) -> NutritionAssessmentRequest:
    if isinstance(data, NutritionAssessmentRequest):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object", field="body", reason="invalid_type")
    return ProfileSnapshotRequest.model_validate(dict(data))


def _number(value: Any, field: str, upper: float) -> float:
    if value is None:
        raise ValidationError(f"{field} is required", field=field, reason="missing")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be a number", field=field, reason="not_numeric")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number", field=field, reason="not_numeric")
    if value <= 0 or value > upper:
        raise ValidationError(
            f"{field} must be greater than 0 and at most {upper}",
            field=field,
            reason="out_of_range",
        )
    return float(value)


def _choice(value: Any, field: str, aliases: Mapping[str, Any], allowed: str):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required", field=field, reason="missing")
    key = value.strip().lower() if isinstance(value, str) else None
    if key not in aliases:
        raise ValidationError(
            f"{field} must be one of: {allowed}",
            field=field,
            reason="unrecognized",
        )
    return aliases[key]


def age_from_birth_date(birth_date: Any, today: Optional[date] = None) -> int:
    """Return completed years between `birth_date` and `today`.

    Raises:
        ValidationError: If the date cannot be parsed or lies in the future.
    """
    today = today or date.today()
    if isinstance(birth_date, datetime):
        birth_date = birth_date.date()
    elif isinstance(birth_date, str):
        try:
            birth_date = date.fromisoformat(birth_date.strip()[:10])
        except ValueError:
            raise ValidationError(
                "birthDate must be an ISO date (YYYY-MM-DD)", field="birthDate", reason="invalid_format"
            ) from None
    elif not isinstance(birth_date, date):
        raise ValidationError(
            "birthDate must be an ISO date (YYYY-MM-DD)", field="birthDate", reason="invalid_format"
        )
    if birth_date > today:
        raise ValidationError("birthDate cannot be in the future", field="birthDate", reason="out_of_range")
    had_birthday = (today.month, today.day) >= (birth_date.month, birth_date.day)
    return today.year - birth_date.year - (0 if had_birthday else 1)


def validate_nutrition_input(
    data: Union[BaseModel, Mapping[str, Any]],
    today: Optional[date] = None,
) -> NutritionInput:
    """Validate and normalize a raw assessment payload.

    Args:
        data: Mapping or request model. Localized keys (`peso`, `altura`,
            `idade`, `sexo`, `atividade`, `objetivo`) are accepted.
        today: Reference date used when the age is derived from `birthDate`.

    Returns:
        The normalized `NutritionInput`.

    Raises:
        ValidationError: Naming the first offending field.
    """
    request = _to_request(data)

    height = _number(request.height_cm, "heightCm", MAX_HEIGHT_CM)
    weight = _number(request.weight_kg, "weightKg", MAX_WEIGHT_KG)

    raw_age = request.age_years
    birth_date = getattr(request, "birth_date", None)
    if raw_age is None and birth_date is not None:
        raw_age = age_from_birth_date(birth_date, today)
    age = _number(raw_age, "ageYears", MAX_AGE_YEARS)
    if not age.is_integer():
        raise ValidationError("ageYears must be a whole number", field="ageYears", reason="not_integer")

    sex = _choice(request.sex, "sex", SEX_ALIASES, "male, female")
    activity = _choice(
        request.activity_level,
        "activityLevel",
        ACTIVITY_ALIASES,
        ", ".join(level.value for level in ActivityLevel),
    )
    goal = _choice(request.goal, "goal", GOAL_ALIASES, ", ".join(g.value for g in Goal))

    nutrition_input = NutritionInput(
        weight_kg=weight,
        height_cm=height,
        age_years=int(age),
        sex=sex,
        activity_level=activity,
        goal=goal,
    )
    logger.debug("Validated input: %s", nutrition_input)
    return nutrition_input
