"""Test error handling functionality.

Verifies that custom exceptions carry the expected attributes and that the
endpoint functions raise them directly.
"""
import pytest

from api.nutrition import assess
from core.exceptions import (
    ConfigurationError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from core.error_handlers import create_error_response
from schemas.nutrition_schema import NutritionAssessmentRequest
from services.nutrition_calculator import CalculatorConfig


def test_assess_endpoint_raises_validation_error():
    """Calling the endpoint function directly surfaces the domain error."""
    with pytest.raises(ValidationError) as exc_info:
        assess(payload=NutritionAssessmentRequest(weight_kg=70), config=CalculatorConfig())
    assert exc_info.value.field == "heightCm"
    assert exc_info.value.status_code == 400


def test_assess_endpoint_returns_assessment(male_moderate):
    result = assess(
        payload=NutritionAssessmentRequest.model_validate(male_moderate),
        config=CalculatorConfig(),
    )
    assert result.bmr == 1649


def test_exception_classes_have_proper_attributes():
    """Test that custom exception classes have expected attributes."""
    exc = NotFoundError("NutritionProfile", "abc")
    assert exc.status_code == 404
    assert "NutritionProfile" in exc.message
    assert "abc" in exc.message

    exc = ValidationError("Invalid input", field="ageYears", reason="out_of_range")
    assert exc.status_code == 400
    assert exc.message == "Invalid input"
    assert exc.details == {"field": "ageYears", "reason": "out_of_range"}

    exc = ConfigurationError("bad formula", config_key="NUTRITION_BMR_FORMULA")
    assert exc.status_code == 500
    assert exc.details == {"config_key": "NUTRITION_BMR_FORMULA"}

    exc = InternalError()
    assert exc.status_code == 500
    assert exc.details == {}


def test_error_response_shape():
    response = create_error_response("weightKg is required", 400, {"field": "weightKg"})
    assert response.status_code == 400
    assert response.body == b'{"error":"weightKg is required","details":{"field":"weightKg"}}'

    response = create_error_response("boom")
    assert response.status_code == 500
    assert response.body == b'{"error":"boom"}'
