"""Pydantic schema package for request and response models."""

from .nutrition_schema import (
    ActivityLevel,
    BmiClassification,
    Goal,
    MacroBreakdown,
    MacroDetail,
    NutritionAssessment,
    NutritionAssessmentRequest,
    ProfileSnapshotRequest,
    ProfileSnapshotResponse,
    Sex,
)

__all__ = [
    "ActivityLevel",
    "BmiClassification",
    "Goal",
    "MacroBreakdown",
    "MacroDetail",
    "NutritionAssessment",
    "NutritionAssessmentRequest",
    "ProfileSnapshotRequest",
    "ProfileSnapshotResponse",
    "Sex",
]
