"""Schemas for nutrition assessment requests, results and snapshots.

Responses are serialized with camelCase keys to stay compatible with the
existing web and mobile callers.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    INTENSE = "intense"
    VERY_INTENSE = "veryIntense"


class Goal(str, Enum):
    LOSE_WEIGHT = "loseWeight"
    GAIN_MUSCLE = "gainMuscle"
    MAINTAIN = "maintain"
    GENERAL_HEALTH = "generalHealth"


class BmiClassification(str, Enum):
    """BMI bands, in ascending order."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE_I = "obeseI"
    OBESE_II = "obeseII"
    OBESE_III = "obeseIII"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NutritionAssessmentRequest(BaseModel):
    """Raw assessment payload.

    Values are deliberately untyped here: range and vocabulary checks are
    done by `services.input_validator` so that every failure is reported as
    a field-specific 400 rather than a generic schema error. Localized field
    names used by existing callers are accepted as aliases.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    weight_kg: Any = Field(
        None,
        validation_alias=AliasChoices("weightKg", "weight_kg", "weight", "peso", "peso_kg"),
        examples=[70],
        description="Body weight in kilograms (0-300]",
    )
    height_cm: Any = Field(
        None,
        validation_alias=AliasChoices("heightCm", "height_cm", "height", "altura", "altura_cm"),
        examples=[175],
        description="Height in centimeters (0-250]",
    )
    age_years: Any = Field(
        None,
        validation_alias=AliasChoices("ageYears", "age_years", "age", "idade"),
        examples=[30],
        description="Age in whole years (0-120]",
    )
    sex: Any = Field(
        None,
        validation_alias=AliasChoices("sex", "gender", "sexo"),
        examples=["male"],
        description="male / female (also M, F, masculino, feminino)",
    )
    activity_level: Any = Field(
        None,
        validation_alias=AliasChoices("activityLevel", "activity_level", "atividade", "atividade_fisica"),
        examples=["moderate"],
        description="sedentary, light, moderate, intense, veryIntense",
    )
    goal: Any = Field(
        None,
        validation_alias=AliasChoices("goal", "objetivo"),
        examples=["maintain"],
        description="loseWeight, gainMuscle, maintain, generalHealth",
    )


class ProfileSnapshotRequest(NutritionAssessmentRequest):
    """Assessment payload for the profile store.

    `birthDate` may be sent instead of `ageYears`; the age is then derived
    on the day the snapshot is taken.
    """

    birth_date: Any = Field(
        None,
        validation_alias=AliasChoices("birthDate", "birth_date", "data_nascimento"),
        examples=["1994-05-17"],
        description="ISO date of birth, used when ageYears is absent",
    )


class MacroDetail(CamelModel):
    grams: int
    kcal: int
    percent: int


class MacroBreakdown(CamelModel):
    protein: MacroDetail
    carbs: MacroDetail
    fat: MacroDetail


class NutritionAssessment(CamelModel):
    """Result of one assessment computation."""

    bmi: float
    bmi_classification: BmiClassification
    bmr: int
    maintenance_calories: int
    target_daily_calories: int
    macros: MacroBreakdown
    bmr_formula: str
    weight_loss_policy: str
    macro_table: str


class ProfileSnapshotResponse(CamelModel):
    """Stored assessment snapshot for a user."""

    id: int
    user_id: str
    weight_kg: float
    height_cm: float
    age_years: int
    sex: Sex
    activity_level: ActivityLevel
    goal: Goal
    assessment: NutritionAssessment
    created_at: str


class ProfileHistoryResponse(CamelModel):
    user_id: str
    total: int
    snapshots: List[ProfileSnapshotResponse]


class BmiBand(CamelModel):
    classification: BmiClassification
    lower: Optional[float] = None
    upper: Optional[float] = None
    label: str


class ReferenceTablesResponse(CamelModel):
    """Constants and labels the calculator is configured with."""

    locale: str
    bmr_formula: str
    weight_loss_policy: str
    macro_table: str
    activity_multipliers: Dict[str, float]
    activity_descriptions: Dict[str, str]
    goal_descriptions: Dict[str, str]
    macro_percentages: Dict[str, Dict[str, int]]
    bmi_bands: List[BmiBand]
