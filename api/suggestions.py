"""
Suggestions API Router
Smart schedule suggestions from the hosted LLM
"""

from fastapi import APIRouter, Body, Depends

from api.deps import get_state, services
from api.schemas.suggestion import MedicationSuggestionRequest, SuggestionResult
from services.suggestion_service import SuggestionService
from services.tracker_service import TrackerState


router = APIRouter(tags=["suggestions"])


@router.post("/suggestions/schedule", response_model=SuggestionResult)
async def suggest_schedule(
    payload: dict = Body(...),
    suggestion_service: SuggestionService = Depends(services.get_suggestion_service)
):
    """
    Suggest a schedule from free-text medication, schedule, adherence and
    routine descriptions
    """
    result = await suggestion_service.suggest(payload)
    return SuggestionResult(
        suggested_schedule=result.suggested_schedule,
        explanation=result.explanation,
    )


@router.post("/medications/{medication_id}/suggestion", response_model=SuggestionResult)
async def suggest_for_medication(
    medication_id: str,
    request: MedicationSuggestionRequest,
    state: TrackerState = Depends(get_state),
    suggestion_service: SuggestionService = Depends(services.get_suggestion_service)
):
    """
    Suggest a schedule for a stored medication using its dose history
    """
    medication = state.get_medication(medication_id)

    result = await suggestion_service.suggest_for_medication(
        medication, state.dose_logs, request.user_daily_routine
    )
    return SuggestionResult(
        suggested_schedule=result.suggested_schedule,
        explanation=result.explanation,
    )
