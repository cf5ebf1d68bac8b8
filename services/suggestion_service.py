"""
Suggestion Service
Smart schedule suggestions from the hosted LLM
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from config import settings
from errors import SuggestionFailure, ValidationError
from models import DoseLog, Medication
from prompts import (
    SCHEDULE_SUGGESTION_PROMPT,
    SUGGESTION_SCHEMA_HINT,
    SUGGESTION_SYSTEM_PROMPT,
)
from schemas import SuggestionRequest, SuggestionResponse
from services.adherence_service import build_adherence_summary
from services.llm_service import llm_service
from services.schedule_service import describe_schedule


logger = logging.getLogger(__name__)

# (request) -> raw two-field mapping; may raise
SuggestionBackend = Callable[[SuggestionRequest], Awaitable[Mapping[str, Any]]]


async def llm_backend(request: SuggestionRequest) -> Mapping[str, Any]:
    """Send the request through the suggestion prompt to the LLM"""
    prompt = SCHEDULE_SUGGESTION_PROMPT.format(
        medication_name=request.medication_name,
        current_schedule=request.current_schedule,
        adherence_data=request.adherence_data,
        user_daily_routine=request.user_daily_routine,
    )
    return await llm_service.generate_json(
        prompt,
        schema_hint=SUGGESTION_SCHEMA_HINT,
        system_prompt=SUGGESTION_SYSTEM_PROMPT,
    )


class SuggestionService:
    """
    Client for schedule suggestions. Every call is a fresh round trip;
    nothing is cached or retried.
    """

    def __init__(
        self,
        backend: Optional[SuggestionBackend] = None,
        timeout: Optional[float] = None
    ):
        self.backend = backend or llm_backend
        self.timeout = settings.SUGGESTION_TIMEOUT_SECONDS if timeout is None else timeout

    async def suggest(
        self,
        request: Union[SuggestionRequest, Mapping[str, Any]]
    ) -> SuggestionResponse:
        """
        Ask the model for a better schedule

        Args:
            request: The four required non-empty fields

        Returns:
            SuggestionResponse with suggested_schedule and explanation

        Raises:
            ValidationError: request is missing a field
            SuggestionFailure: service unreachable, timed out or returned
                output without both fields
        """
        if not isinstance(request, SuggestionRequest):
            try:
                request = SuggestionRequest.model_validate(request)
            except PydanticValidationError as e:
                raise ValidationError.from_pydantic(e, "Invalid suggestion request") from e

        logger.info(f"Requesting schedule suggestion for {request.medication_name}")

        try:
            raw = await asyncio.wait_for(self.backend(request), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Schedule suggestion timed out after {self.timeout}s")
            raise SuggestionFailure("Schedule suggestion timed out", e) from e
        except Exception as e:
            logger.error(f"Schedule suggestion failed: {e}")
            raise SuggestionFailure("Schedule suggestion service unavailable", e) from e

        try:
            return SuggestionResponse.model_validate(raw)
        except PydanticValidationError as e:
            logger.warning(f"Schedule suggestion returned an invalid shape: {raw!r}")
            raise SuggestionFailure("Schedule suggestion service returned an invalid response", e) from e

    async def suggest_for_medication(
        self,
        medication: Medication,
        logs: Iterable[DoseLog],
        user_daily_routine: str
    ) -> SuggestionResponse:
        """Build the request from a stored medication and its dose history"""
        request = {
            "medication_name": medication.name,
            "current_schedule": describe_schedule(medication.schedule),
            "adherence_data": build_adherence_summary(medication, logs),
            "user_daily_routine": user_daily_routine,
        }
        return await self.suggest(request)


# Singleton instance
suggestion_service = SuggestionService()
