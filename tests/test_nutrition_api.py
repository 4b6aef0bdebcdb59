"""HTTP tests for the assessment endpoints, error bodies and CORS."""
import pytest
from fastapi.testclient import TestClient

from database.deps import get_calculator_config
from main import app
from services.nutrition_calculator import CalculatorConfig, NutritionCalculator


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def test_assessment_returns_camel_case_result(client, male_moderate):
    res = client.post("/api/nutrition/assessment", json=male_moderate)
    assert res.status_code == 200
    body = res.json()
    assert body["bmi"] == 22.9
    assert body["bmiClassification"] == "normal"
    assert body["bmr"] == 1649
    assert body["targetDailyCalories"] == 2556
    assert body["macros"]["carbs"] == {"grams": 320, "kcal": 1280, "percent": 50}
    assert body["bmrFormula"] == "mifflin_st_jeor"


@pytest.mark.parametrize("path", [
    "/functions/v1/calculate-nutrition-metrics",
    "/functions/v1/nutrition-assessment",
])
def test_legacy_paths_accept_localized_payload(client, path):
    payload = {"peso": 60, "altura": 160, "idade": 25, "sexo": "F",
               "atividade": "sedentarismo", "objetivo": "perda_peso"}
    res = client.post(path, json=payload)
    assert res.status_code == 200
    assert res.json()["targetDailyCalories"] == 1340


def test_validation_failure_is_400_with_field(client, male_moderate):
    male_moderate["heightCm"] = 0
    res = client.post("/api/nutrition/assessment", json=male_moderate)
    assert res.status_code == 400
    body = res.json()
    assert isinstance(body["error"], str)
    assert "heightCm" in body["error"]
    assert body["details"]["field"] == "heightCm"


def test_weight_above_bound_is_400(client, male_moderate):
    male_moderate["weightKg"] = 301
    res = client.post("/api/nutrition/assessment", json=male_moderate)
    assert res.status_code == 400
    assert res.json()["details"]["field"] == "weightKg"


def test_malformed_json_is_400(client):
    res = client.post(
        "/api/nutrition/assessment",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert isinstance(res.json()["error"], str)


def test_non_object_body_is_400(client):
    res = client.post("/api/nutrition/assessment", json=[1, 2, 3])
    assert res.status_code == 400
    assert isinstance(res.json()["error"], str)


def test_internal_failure_is_generic_500(client, male_moderate, monkeypatch):
    def boom(self, nutrition_input):
        raise ZeroDivisionError("stage failure")

    monkeypatch.setattr(NutritionCalculator, "assess", boom)
    res = client.post("/api/nutrition/assessment", json=male_moderate)
    assert res.status_code == 500
    body = res.json()
    assert isinstance(body["error"], str)
    assert "stage failure" not in body["error"]
    assert "access-control-allow-origin" in res.headers


def test_configured_variants_are_used(client, female_sedentary):
    app.dependency_overrides[get_calculator_config] = lambda: CalculatorConfig(
        weight_loss_policy="fixed_deficit", macro_table="high_protein"
    )
    res = client.post("/api/nutrition/assessment", json=female_sedentary)
    assert res.status_code == 200
    body = res.json()
    assert body["targetDailyCalories"] == 1077
    assert body["macros"]["protein"]["percent"] == 35


def test_options_preflight_returns_empty_200(client):
    res = client.options(
        "/api/nutrition/assessment",
        headers={"Origin": "https://app.example.com", "Access-Control-Request-Method": "POST"},
    )
    assert res.status_code == 200
    assert res.content == b""
    assert res.headers["access-control-allow-origin"] == "*"
    assert "content-type" in res.headers["access-control-allow-headers"]


def test_bare_options_returns_empty_200(client):
    res = client.options("/functions/v1/nutrition-assessment")
    assert res.status_code == 200
    assert res.content == b""


def test_every_response_allows_cross_origin(client, male_moderate):
    ok = client.post("/api/nutrition/assessment", json=male_moderate)
    bad = client.post("/api/nutrition/assessment", json={})
    assert ok.headers["access-control-allow-origin"] == "*"
    assert bad.headers["access-control-allow-origin"] == "*"


def test_reference_tables_in_portuguese(client):
    res = client.get("/api/nutrition/reference", params={"locale": "pt-br"})
    assert res.status_code == 200
    body = res.json()
    assert body["locale"] == "pt-BR"
    assert body["activityMultipliers"]["veryIntense"] == 1.9
    assert body["macroPercentages"]["loseWeight"] == {"protein": 30, "carbs": 35, "fat": 35}
    labels = [band["label"] for band in body["bmiBands"]]
    assert labels[0] == "Abaixo do peso"
    assert labels[-1] == "Obesidade grau III"
    assert body["bmiBands"][-1]["upper"] is None


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["database"] == "connected"
