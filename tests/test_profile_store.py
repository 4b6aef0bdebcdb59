"""Tests for the profile store service and its endpoints."""
import uuid
from datetime import date

import pytest
from fastapi.testclient import TestClient

from core.exceptions import NotFoundError, ValidationError
from database.database import SessionLocal
from main import app
from services.nutrition_calculator import CalculatorConfig
from services.profile_service import ProfileService


def _user_id():
    return f"user-{uuid.uuid4()}"


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def test_save_and_read_latest(db, male_moderate):
    service = ProfileService(db)
    user_id = _user_id()
    saved = service.save_snapshot(user_id, male_moderate)
    assert saved.user_id == user_id
    assert saved.assessment.target_daily_calories == 2556

    latest = service.latest(user_id)
    assert latest.id == saved.id
    assert latest.assessment == saved.assessment


def test_snapshot_timestamp_is_utc(db, male_moderate):
    saved = ProfileService(db).save_snapshot(_user_id(), male_moderate)
    assert saved.created_at.endswith("+00:00")


def test_snapshots_are_appended_not_overwritten(db, male_moderate):
    service = ProfileService(db)
    user_id = _user_id()
    first = service.save_snapshot(user_id, male_moderate)
    male_moderate["weightKg"] = 68
    second = service.save_snapshot(user_id, male_moderate)

    history = service.history(user_id)
    assert history.total == 2
    assert [s.id for s in history.snapshots] == [second.id, first.id]
    assert service.latest(user_id).weight_kg == 68


def test_history_pagination(db, male_moderate):
    service = ProfileService(db)
    user_id = _user_id()
    ids = [service.save_snapshot(user_id, male_moderate).id for _ in range(3)]
    page = service.history(user_id, skip=1, limit=1)
    assert page.total == 3
    assert [s.id for s in page.snapshots] == [ids[1]]


def test_snapshot_records_calculator_variants(db, female_sedentary):
    service = ProfileService(db, CalculatorConfig(bmr_formula="harris_benedict"))
    saved = service.save_snapshot(_user_id(), female_sedentary)
    assert saved.assessment.bmr_formula == "harris_benedict"


def test_latest_without_snapshot_raises_not_found(db):
    with pytest.raises(NotFoundError) as exc_info:
        ProfileService(db).latest("nobody")
    assert exc_info.value.status_code == 404


def test_invalid_payload_is_not_stored(db, male_moderate):
    service = ProfileService(db)
    user_id = _user_id()
    male_moderate["goal"] = "teleport"
    with pytest.raises(ValidationError):
        service.save_snapshot(user_id, male_moderate)
    assert service.history(user_id).total == 0


def test_blank_user_id_rejected(db, male_moderate):
    with pytest.raises(ValidationError) as exc_info:
        ProfileService(db).save_snapshot("  ", male_moderate)
    assert exc_info.value.field == "userId"


def test_birth_date_used_for_age(db, male_moderate):
    male_moderate.pop("ageYears")
    male_moderate["birthDate"] = "1990-06-01"
    saved = ProfileService(db).save_snapshot(_user_id(), male_moderate, today=date(2020, 6, 1))
    assert saved.age_years == 30
    assert saved.assessment.bmr == 1649


def test_profile_endpoints_round_trip(client, male_moderate):
    user_id = _user_id()
    created = client.post(f"/api/nutrition-profile/{user_id}", json=male_moderate)
    assert created.status_code == 201
    body = created.json()
    assert body["userId"] == user_id
    assert body["assessment"]["targetDailyCalories"] == 2556

    latest = client.get(f"/api/nutrition-profile/{user_id}")
    assert latest.status_code == 200
    assert latest.json()["id"] == body["id"]

    history = client.get(f"/api/nutrition-profile/{user_id}/history")
    assert history.status_code == 200
    assert history.json()["total"] == 1


def test_profile_endpoint_missing_user_is_404(client):
    res = client.get(f"/api/nutrition-profile/{_user_id()}")
    assert res.status_code == 404
    assert "not found" in res.json()["error"]


def test_profile_endpoint_invalid_payload_is_400(client, male_moderate):
    male_moderate["ageYears"] = 0
    res = client.post(f"/api/nutrition-profile/{_user_id()}", json=male_moderate)
    assert res.status_code == 400
    assert res.json()["details"]["field"] == "ageYears"


def test_unexpected_error_keeps_cors_header(monkeypatch):
    def broken(self, user_id):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(ProfileService, "latest", broken)
    with TestClient(app, raise_server_exceptions=False) as c:
        res = c.get(f"/api/nutrition-profile/{_user_id()}")
    assert res.status_code == 500
    assert res.json() == {"error": "An internal server error occurred"}
    assert res.headers["access-control-allow-origin"] == "*"
