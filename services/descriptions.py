"""Human-readable labels for assessment values.

Existing clients display Brazilian Portuguese text, so both `en` and
`pt-BR` are provided. Unknown locales fall back to English.
"""

from typing import Dict

from schemas.nutrition_schema import ActivityLevel, BmiClassification, Goal

DEFAULT_LOCALE = "en"

BMI_LABELS = {
    "en": {
        BmiClassification.UNDERWEIGHT: "Underweight",
        BmiClassification.NORMAL: "Normal weight",
        BmiClassification.OVERWEIGHT: "Overweight",
        BmiClassification.OBESE_I: "Obesity class I",
        BmiClassification.OBESE_II: "Obesity class II",
        BmiClassification.OBESE_III: "Obesity class III",
    },
    "pt-BR": {
        BmiClassification.UNDERWEIGHT: "Abaixo do peso",
        BmiClassification.NORMAL: "Peso normal",
        BmiClassification.OVERWEIGHT: "Sobrepeso",
        BmiClassification.OBESE_I: "Obesidade grau I",
        BmiClassification.OBESE_II: "Obesidade grau II",
        BmiClassification.OBESE_III: "Obesidade grau III",
    },
}

ACTIVITY_DESCRIPTIONS = {
    "en": {
        ActivityLevel.SEDENTARY: "Little or no exercise",
        ActivityLevel.LIGHT: "Light exercise 1-3 days/week",
        ActivityLevel.MODERATE: "Moderate exercise 3-5 days/week",
        ActivityLevel.INTENSE: "Hard exercise 6-7 days/week",
        ActivityLevel.VERY_INTENSE: "Very hard exercise or a physical job",
    },
    "pt-BR": {
        ActivityLevel.SEDENTARY: "Pouco ou nenhum exercício",
        ActivityLevel.LIGHT: "Exercício leve 1-3 dias/semana",
        ActivityLevel.MODERATE: "Exercício moderado 3-5 dias/semana",
        ActivityLevel.INTENSE: "Exercício intenso 6-7 dias/semana",
        ActivityLevel.VERY_INTENSE: "Exercício muito intenso ou trabalho físico",
    },
}

GOAL_DESCRIPTIONS = {
    "en": {
        Goal.LOSE_WEIGHT: "Weight loss",
        Goal.GAIN_MUSCLE: "Muscle gain",
        Goal.MAINTAIN: "Weight maintenance",
        Goal.GENERAL_HEALTH: "General health",
    },
    "pt-BR": {
        Goal.LOSE_WEIGHT: "Perda de peso",
        Goal.GAIN_MUSCLE: "Ganho de massa muscular",
        Goal.MAINTAIN: "Manutenção de peso",
        Goal.GENERAL_HEALTH: "Saúde geral",
    },
}


def resolve_locale(locale: str) -> str:
    """Match a locale tag case-insensitively, e.g. `pt-br` or `pt_BR`."""
    wanted = (locale or "").replace("_", "-").lower()
    for known in BMI_LABELS:
        if known.lower() == wanted:
            return known
    if wanted.startswith("pt"):
        return "pt-BR"
    return DEFAULT_LOCALE


def bmi_label(classification: BmiClassification, locale: str = DEFAULT_LOCALE) -> str:
    return BMI_LABELS[resolve_locale(locale)][classification]


def activity_descriptions(locale: str = DEFAULT_LOCALE) -> Dict[str, str]:
    return {level.value: text for level, text in ACTIVITY_DESCRIPTIONS[resolve_locale(locale)].items()}


def goal_descriptions(locale: str = DEFAULT_LOCALE) -> Dict[str, str]:
    return {goal.value: text for goal, text in GOAL_DESCRIPTIONS[resolve_locale(locale)].items()}
