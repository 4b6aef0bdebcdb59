"""Nutrition profile API router.

Stores a fresh assessment snapshot per request and reads back the latest
snapshot or the full history for a user.
"""

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from core.logger import get_logger
from database.deps import get_calculator_config, get_db
from schemas.nutrition_schema import (
    ProfileHistoryResponse,
    ProfileSnapshotRequest,
    ProfileSnapshotResponse,
)
from services.nutrition_calculator import CalculatorConfig
from services.profile_service import ProfileService

logger = get_logger("api.profiles")
router = APIRouter(prefix="/api/nutrition-profile", tags=["profiles"])


@router.post("/{user_id}", response_model=ProfileSnapshotResponse, status_code=201)
def save_profile(
    user_id: str,
    payload: ProfileSnapshotRequest = Body(...),
    db: Session = Depends(get_db),
    config: CalculatorConfig = Depends(get_calculator_config),
):
    """Compute an assessment and append it to the user's history.

    `birthDate` may replace `ageYears`.

    Raises:
        ValidationError: If the payload is invalid (400).
        DatabaseError: If the snapshot cannot be stored (500).
    """
    logger.info("Saving nutrition profile snapshot for user %s", user_id)
    return ProfileService(db, config).save_snapshot(user_id, payload)


@router.get("/{user_id}", response_model=ProfileSnapshotResponse)
def get_profile(user_id: str, db: Session = Depends(get_db)):
    """Return the user's latest snapshot.

    Raises:
        NotFoundError: If the user has no snapshot yet (404).
    """
    return ProfileService(db).latest(user_id)


@router.get("/{user_id}/history", response_model=ProfileHistoryResponse)
def get_profile_history(
    user_id: str,
    limit: int = Query(50, ge=1, le=500),
    skip: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """Return the user's snapshots, newest first."""
    return ProfileService(db).history(user_id, skip=skip, limit=limit)
