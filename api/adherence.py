"""
Adherence API Router
Endpoints for adherence statistics
"""

from typing import List, Optional
from datetime import datetime
from fastapi import APIRouter, Depends, Query

from api.deps import get_now, get_state, services
from api.schemas.adherence import (
    AdherenceDashboard,
    AdherenceStatsResponse,
    DailyAdherenceResponse,
    MedicationAdherenceResponse,
)
from services.tracker_service import TrackerState


router = APIRouter(prefix="/adherence", tags=["adherence"])


@router.get("/stats", response_model=AdherenceStatsResponse)
async def get_adherence_stats(
    days: Optional[int] = Query(None, ge=1, le=365),
    medication_id: Optional[str] = Query(None, alias="medicationId"),
    state: TrackerState = Depends(get_state),
    now: datetime = Depends(get_now)
):
    """
    Adherence over the trailing window (30 days unless `days` is given)
    """
    adherence_service = services.get_adherence_service()

    if medication_id is not None:
        state.get_medication(medication_id)

    return adherence_service.get_stats(
        state.dose_logs, now, days=days, medication_id=medication_id
    )


@router.get("/daily", response_model=List[DailyAdherenceResponse])
async def get_daily_adherence(
    days: Optional[int] = Query(None, ge=1, le=90),
    medication_id: Optional[str] = Query(None, alias="medicationId"),
    state: TrackerState = Depends(get_state),
    now: datetime = Depends(get_now)
):
    """
    Taken/skipped counts per day, oldest first
    """
    adherence_service = services.get_adherence_service()

    if medication_id is not None:
        state.get_medication(medication_id)

    return adherence_service.get_daily_series(
        state.dose_logs, now, days=days, medication_id=medication_id
    )


@router.get("/by-medication", response_model=List[MedicationAdherenceResponse])
async def get_adherence_by_medication(
    days: Optional[int] = Query(None, ge=1, le=365),
    state: TrackerState = Depends(get_state),
    now: datetime = Depends(get_now)
):
    """
    Adherence per medication, lowest first
    """
    adherence_service = services.get_adherence_service()

    rows = adherence_service.get_adherence_by_medication(
        state.medications, state.dose_logs, now, days=days
    )
    return [MedicationAdherenceResponse.from_domain(row) for row in rows]


@router.get("/dashboard", response_model=AdherenceDashboard)
async def get_adherence_dashboard(
    state: TrackerState = Depends(get_state),
    now: datetime = Depends(get_now)
):
    """
    Stats card and weekly chart in one call
    """
    adherence_service = services.get_adherence_service()

    logs = state.dose_logs
    return AdherenceDashboard(
        stats=AdherenceStatsResponse.model_validate(adherence_service.get_stats(logs, now)),
        daily=[
            DailyAdherenceResponse.model_validate(day)
            for day in adherence_service.get_daily_series(logs, now)
        ],
    )
