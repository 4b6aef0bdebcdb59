"""Nutrition assessment endpoints.

The assessment is also served at the hosted-function paths that existing
web and mobile callers were built against.
"""

from fastapi import APIRouter, Body, Depends

from core.logger import get_logger
from database.deps import get_calculator_config
from schemas.nutrition_schema import (
    BmiBand,
    BmiClassification,
    NutritionAssessment,
    NutritionAssessmentRequest,
    ReferenceTablesResponse,
)
from services.descriptions import activity_descriptions, bmi_label, goal_descriptions, resolve_locale
from services.nutrition_calculator import (
    ACTIVITY_MULTIPLIERS,
    BMI_BANDS,
    MACRO_TABLES,
    CalculatorConfig,
    compute_nutrition_assessment,
)

logger = get_logger("api.nutrition")
router = APIRouter(tags=["nutrition"])

LEGACY_ASSESSMENT_PATHS = (
    "/functions/v1/calculate-nutrition-metrics",
    "/functions/v1/nutrition-assessment",
)


def assess(
    payload: NutritionAssessmentRequest = Body(...),
    config: CalculatorConfig = Depends(get_calculator_config),
) -> NutritionAssessment:
    """Compute BMI, BMR, calorie target and macros for the given body data.

    Raises:
        ValidationError: If a field is missing, malformed or out of range (400).
        InternalError: If the computation fails unexpectedly (500).
    """
    assessment = compute_nutrition_assessment(payload, config)
    logger.info(
        "Assessment computed: bmi=%s bmr=%s target=%s",
        assessment.bmi,
        assessment.bmr,
        assessment.target_daily_calories,
    )
    return assessment


router.add_api_route(
    "/api/nutrition/assessment",
    assess,
    methods=["POST"],
    response_model=NutritionAssessment,
)
for _path in LEGACY_ASSESSMENT_PATHS:
    router.add_api_route(
        _path,
        assess,
        methods=["POST"],
        response_model=NutritionAssessment,
        include_in_schema=False,
    )


@router.get("/api/nutrition/reference", response_model=ReferenceTablesResponse)
def reference_tables(locale: str = "en", config: CalculatorConfig = Depends(get_calculator_config)):
    """Return the multipliers, macro table and BMI bands in use, with labels."""
    locale = resolve_locale(locale)
    bands = []
    lower = None
    for upper, classification in BMI_BANDS:
        bands.append(BmiBand(classification=classification, lower=lower, upper=upper,
                             label=bmi_label(classification, locale)))
        lower = upper
    bands.append(BmiBand(classification=BmiClassification.OBESE_III, lower=lower, upper=None,
                         label=bmi_label(BmiClassification.OBESE_III, locale)))

    return ReferenceTablesResponse(
        locale=locale,
        bmr_formula=config.bmr_formula,
        weight_loss_policy=config.weight_loss_policy,
        macro_table=config.macro_table,
        activity_multipliers={level.value: m for level, m in ACTIVITY_MULTIPLIERS.items()},
        activity_descriptions=activity_descriptions(locale),
        goal_descriptions=goal_descriptions(locale),
        macro_percentages={
            goal.value: dict(zip(("protein", "carbs", "fat"), percentages))
            for goal, percentages in MACRO_TABLES[config.macro_table].items()
        },
        bmi_bands=bands,
    )
