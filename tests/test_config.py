"""Tests for settings parsing and calculator configuration."""
import pytest

from core.config import Settings
from core.exceptions import ConfigurationError
from services.descriptions import activity_descriptions, bmi_label, goal_descriptions, resolve_locale
from schemas.nutrition_schema import BmiClassification


def test_defaults_build_canonical_config():
    config = Settings(_env_file=None).calculator_config()
    assert config.bmr_formula == "mifflin_st_jeor"
    assert config.weight_loss_policy == "threshold_percent"
    assert config.macro_table == "standard"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("NUTRITION_BMR_FORMULA", "harris_benedict")
    monkeypatch.setenv("NUTRITION_MACRO_TABLE", "high_protein")
    config = Settings(_env_file=None).calculator_config()
    assert config.bmr_formula == "harris_benedict"
    assert config.macro_table == "high_protein"


@pytest.mark.parametrize("key, value", [
    ("nutrition_bmr_formula", "katch_mcardle"),
    ("nutrition_weight_loss_policy", "crash_diet"),
    ("nutrition_macro_table", "keto"),
])
def test_unknown_variant_raises_configuration_error(key, value):
    settings = Settings(_env_file=None, **{key: value})
    with pytest.raises(ConfigurationError) as exc_info:
        settings.calculator_config()
    assert exc_info.value.config_key == key.upper()


def test_allowed_origins():
    assert Settings(_env_file=None).allowed_origins() == ["*"]
    settings = Settings(_env_file=None, cors_allow_origins="https://a.example, https://b.example")
    assert settings.allowed_origins() == ["https://a.example", "https://b.example"]


def test_locale_resolution_and_labels():
    assert resolve_locale("pt_BR") == "pt-BR"
    assert resolve_locale("pt") == "pt-BR"
    assert resolve_locale("de") == "en"
    assert bmi_label(BmiClassification.NORMAL, "pt-BR") == "Peso normal"
    assert activity_descriptions("pt-BR")["sedentary"] == "Pouco ou nenhum exercício"
    assert goal_descriptions()["gainMuscle"] == "Muscle gain"
