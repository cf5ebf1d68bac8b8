"""
Medications API Router
Endpoints for managing medications and logging doses
"""

from typing import List, Optional
from datetime import datetime
from fastapi import APIRouter, Body, Depends, Query, Response, status

from api.deps import get_now, get_state, services
from api.schemas.medication import DoseLogCreate, DoseLogResponse, MedicationResponse
from services.tracker_service import TrackerState


router = APIRouter(tags=["medications"])


@router.post("/medications", response_model=MedicationResponse, status_code=status.HTTP_201_CREATED)
async def add_medication(
    payload: dict = Body(...),
    state: TrackerState = Depends(get_state),
    now: datetime = Depends(get_now)
):
    """
    Add a medication to the session
    """
    schedule_service = services.get_schedule_service()

    medication = state.add_medication(payload)
    return MedicationResponse.from_domain(
        medication, schedule_service.get_next_dose(medication, now)
    )


@router.get("/medications", response_model=List[MedicationResponse])
async def list_medications(
    state: TrackerState = Depends(get_state),
    now: datetime = Depends(get_now)
):
    """
    List medications with their next dose
    """
    schedule_service = services.get_schedule_service()

    return [
        MedicationResponse.from_domain(med, schedule_service.get_next_dose(med, now))
        for med in state.medications
    ]


@router.get("/medications/upcoming")
async def get_upcoming_doses(
    state: TrackerState = Depends(get_state),
    now: datetime = Depends(get_now)
):
    """
    Next dose of every medication, soonest first
    """
    schedule_service = services.get_schedule_service()

    upcoming = schedule_service.get_upcoming_doses(list(state.medications), now)
    return [
        {
            "medicationId": item["medication_id"],
            "medicationName": item["medication_name"],
            "nextDose": item["next_dose"].isoformat(),
        }
        for item in upcoming
    ]


@router.get("/medications/{medication_id}", response_model=MedicationResponse)
async def get_medication(
    medication_id: str,
    state: TrackerState = Depends(get_state),
    now: datetime = Depends(get_now)
):
    """
    Get a medication by ID
    """
    schedule_service = services.get_schedule_service()

    medication = state.get_medication(medication_id)
    return MedicationResponse.from_domain(
        medication, schedule_service.get_next_dose(medication, now)
    )


@router.delete("/medications/{medication_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_medication(
    medication_id: str,
    state: TrackerState = Depends(get_state)
):
    """
    Remove a medication; its dose history is kept
    """
    state.remove_medication(medication_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/medications/{medication_id}/doses",
    response_model=DoseLogResponse,
    status_code=status.HTTP_201_CREATED
)
async def log_dose(
    medication_id: str,
    dose_data: DoseLogCreate,
    state: TrackerState = Depends(get_state),
    now: datetime = Depends(get_now)
):
    """
    Log a taken or skipped dose
    """
    return state.log_dose(medication_id, dose_data.status, now=now)


@router.get("/doses", response_model=List[DoseLogResponse])
async def list_doses(
    medication_id: Optional[str] = Query(None, alias="medicationId"),
    state: TrackerState = Depends(get_state)
):
    """
    Dose history, newest first
    """
    logs = [
        log for log in state.dose_logs
        if medication_id is None or log.medication_id == medication_id
    ]
    logs.sort(key=lambda log: log.action_time, reverse=True)
    return logs
