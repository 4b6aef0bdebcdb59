"""Nutrition calculation pipeline.

Turns validated body measurements and goals into BMI, BMR, maintenance
(TDEE) and target calories, and a macronutrient split. Every stage is a pure
function of its inputs; intermediate values keep full float precision and
are rounded half-up only when they become caller-facing fields.

The variant choices (BMR formula, weight-loss policy, macro table) are
passed in explicitly through `CalculatorConfig`.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from core.exceptions import InternalError
from core.logger import get_logger
from schemas.nutrition_schema import (
    ActivityLevel,
    BmiClassification,
    Goal,
    MacroBreakdown,
    MacroDetail,
    NutritionAssessment,
    NutritionAssessmentRequest,
    Sex,
)
from services.input_validator import NutritionInput, validate_nutrition_input

logger = get_logger("services.nutrition_calculator")

# kcal per gram
ENERGY_DENSITY = {"protein": 4, "carbs": 4, "fat": 9}

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.INTENSE: 1.725,
    ActivityLevel.VERY_INTENSE: 1.9,
}

WEIGHT_LOSS_THRESHOLD_KCAL = 2000
WEIGHT_LOSS_DEFICIT_KCAL = 500
WEIGHT_LOSS_FACTOR = 0.85
MUSCLE_GAIN_SURPLUS_KCAL = 300

MIFFLIN_ST_JEOR = "mifflin_st_jeor"
HARRIS_BENEDICT = "harris_benedict"
BMR_FORMULAS = (MIFFLIN_ST_JEOR, HARRIS_BENEDICT)

# threshold_percent: x0.85 below 2000 kcal maintenance, -500 kcal otherwise
# fixed_deficit: always -500 kcal
THRESHOLD_PERCENT = "threshold_percent"
FIXED_DEFICIT = "fixed_deficit"
WEIGHT_LOSS_POLICIES = (THRESHOLD_PERCENT, FIXED_DEFICIT)

# (protein %, carbs %, fat %) per goal
MACRO_TABLES: Dict[str, Dict[Goal, Tuple[int, int, int]]] = {
    "standard": {
        Goal.LOSE_WEIGHT: (30, 35, 35),
        Goal.GAIN_MUSCLE: (25, 50, 25),
        Goal.MAINTAIN: (20, 50, 30),
        Goal.GENERAL_HEALTH: (20, 50, 30),
    },
    "high_protein": {
        Goal.LOSE_WEIGHT: (35, 35, 30),
        Goal.GAIN_MUSCLE: (35, 40, 25),
        Goal.MAINTAIN: (30, 45, 25),
        Goal.GENERAL_HEALTH: (30, 45, 25),
    },
}

for _table_name, _table in MACRO_TABLES.items():
    for _goal in Goal:
        if sum(_table[_goal]) != 100:
            raise ValueError(f"Macro table '{_table_name}' does not sum to 100 for {_goal.value}")

# Upper bounds (exclusive) of each BMI band; the last band is open-ended.
BMI_BANDS = (
    (18.5, BmiClassification.UNDERWEIGHT),
    (25.0, BmiClassification.NORMAL),
    (30.0, BmiClassification.OVERWEIGHT),
    (35.0, BmiClassification.OBESE_I),
    (40.0, BmiClassification.OBESE_II),
)


@dataclass(frozen=True)
class CalculatorConfig:
    """Variant choices for one calculator instance."""

    bmr_formula: str = MIFFLIN_ST_JEOR
    weight_loss_policy: str = THRESHOLD_PERCENT
    macro_table: str = "standard"

    def __post_init__(self):
        if self.bmr_formula not in BMR_FORMULAS:
            raise ValueError(f"Unknown BMR formula: {self.bmr_formula}")
        if self.weight_loss_policy not in WEIGHT_LOSS_POLICIES:
            raise ValueError(f"Unknown weight loss policy: {self.weight_loss_policy}")
        if self.macro_table not in MACRO_TABLES:
            raise ValueError(f"Unknown macro table: {self.macro_table}")


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round using the schoolbook rule (0.5 always rounds away from zero).

    The built-in `round` rounds half to even, which would turn 2.5 into 2.
    """
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def classify_bmi(bmi: float) -> BmiClassification:
    """Map a BMI value to its band. Never raises."""
    for upper, classification in BMI_BANDS:
        if bmi < upper:
            return classification
    return BmiClassification.OBESE_III


class NutritionCalculator:
    """Stage-by-stage nutrition calculator bound to one `CalculatorConfig`."""

    def __init__(self, config: Optional[CalculatorConfig] = None):
        self.config = config or CalculatorConfig()

    def calculate_bmi(self, weight_kg: float, height_cm: float) -> float:
        """Calculate BMI from weight in kg and height in cm (unrounded)."""
        h_m = height_cm / 100.0
        return weight_kg / (h_m * h_m)

    def calculate_bmr(self, weight_kg: float, height_cm: float, age_years: int, sex: Sex) -> float:
        """Calculate basal metabolic rate in kcal/day (unrounded).

        Mifflin-St Jeor by default; the revised Harris-Benedict equation when
        configured. The two differ by up to a few hundred kcal.
        """
        if self.config.bmr_formula == HARRIS_BENEDICT:
            if sex == Sex.MALE:
                bmr = 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age_years
            else:
                bmr = 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age_years
        else:
            if sex == Sex.MALE:
                bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age_years + 5
            else:
                bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age_years - 161
        bmr = max(bmr, 0.0)
        logger.debug("BMR (%s) calculated: %s", self.config.bmr_formula, bmr)
        return bmr

    def calculate_maintenance_calories(self, bmr: float, activity_level: ActivityLevel) -> float:
        """Scale BMR by the activity multiplier (TDEE)."""
        val = bmr * ACTIVITY_MULTIPLIERS[activity_level]
        logger.debug("Maintenance calories for %s: %s", activity_level.value, val)
        return val

    def calculate_target_calories(self, maintenance: float, goal: Goal) -> float:
        """Shift maintenance calories by the goal adjustment.

        Weight loss follows the configured policy; muscle gain adds a fixed
        surplus; maintain and general health are unchanged. Never negative.
        """
        if goal == Goal.LOSE_WEIGHT:
            if (
                self.config.weight_loss_policy == THRESHOLD_PERCENT
                and maintenance < WEIGHT_LOSS_THRESHOLD_KCAL
            ):
                val = maintenance * WEIGHT_LOSS_FACTOR
            else:
                val = maintenance - WEIGHT_LOSS_DEFICIT_KCAL
        elif goal == Goal.GAIN_MUSCLE:
            val = maintenance + MUSCLE_GAIN_SURPLUS_KCAL
        else:
            val = maintenance
        val = max(val, 0.0)
        logger.debug("Target calories for goal %s: %s", goal.value, val)
        return val

    def macro_percentages(self, goal: Goal) -> Tuple[int, int, int]:
        return MACRO_TABLES[self.config.macro_table][goal]

    def allocate_macros(self, target_calories: int, goal: Goal) -> MacroBreakdown:
        """Split a calorie target into protein/carbs/fat.

        Grams are rounded independently and kcal is recomputed from the
        rounded grams, so `kcal == grams * density` holds exactly.
        """
        details = {}
        for name, percent in zip(("protein", "carbs", "fat"), self.macro_percentages(goal)):
            density = ENERGY_DENSITY[name]
            # exact decimal quotient, so a true .5 gram always rounds up
            exact = Decimal(percent * target_calories) / Decimal(100 * density)
            grams = int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))
            details[name] = MacroDetail(grams=grams, kcal=grams * density, percent=percent)
        macros = MacroBreakdown(**details)
        logger.debug("Macros calculated: %s", macros)
        return macros

    def assess(self, nutrition_input: NutritionInput) -> NutritionAssessment:
        """Run every stage on an already validated input."""
        bmi_raw = self.calculate_bmi(nutrition_input.weight_kg, nutrition_input.height_cm)
        bmr_raw = self.calculate_bmr(
            nutrition_input.weight_kg,
            nutrition_input.height_cm,
            nutrition_input.age_years,
            nutrition_input.sex,
        )
        maintenance_raw = self.calculate_maintenance_calories(bmr_raw, nutrition_input.activity_level)
        target_raw = self.calculate_target_calories(maintenance_raw, nutrition_input.goal)

        bmi = round_half_up(bmi_raw, 1)
        target = int(round_half_up(target_raw))
        return NutritionAssessment(
            bmi=bmi,
            bmi_classification=classify_bmi(bmi),
            bmr=int(round_half_up(bmr_raw)),
            maintenance_calories=int(round_half_up(maintenance_raw)),
            target_daily_calories=target,
            macros=self.allocate_macros(target, nutrition_input.goal),
            bmr_formula=self.config.bmr_formula,
            weight_loss_policy=self.config.weight_loss_policy,
            macro_table=self.config.macro_table,
        )


def compute_nutrition_assessment(
    data: Union[NutritionInput, NutritionAssessmentRequest, Mapping[str, Any]],
    config: Optional[CalculatorConfig] = None,
) -> NutritionAssessment:
    """Validate raw input and compute a complete assessment.

    Raises:
        ValidationError: If a field is missing, malformed or out of range.
        InternalError: If the computation fails unexpectedly. The input is
            logged; no partial result is returned.
    """
    nutrition_input = data if isinstance(data, NutritionInput) else validate_nutrition_input(data)
    calculator = NutritionCalculator(config)
    try:
        return calculator.assess(nutrition_input)
    except Exception as exc:
        logger.exception("Assessment failed for input %s with %s", nutrition_input, calculator.config)
        raise InternalError() from exc


__all__ = [
    "CalculatorConfig",
    "NutritionCalculator",
    "classify_bmi",
    "compute_nutrition_assessment",
    "round_half_up",
]
