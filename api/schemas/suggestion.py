"""
Suggestion Schemas
Pydantic models for smart schedule requests and responses
"""

from pydantic import Field

from api.schemas.base import ApiModel
from config import tracker_config


class MedicationSuggestionRequest(ApiModel):
    """Routine description for a suggestion on a stored medication"""
    user_daily_routine: str = Field(
        default=tracker_config.DEFAULT_DAILY_ROUTINE,
        min_length=tracker_config.MIN_ROUTINE_LENGTH,
    )


class SuggestionResult(ApiModel):
    """Suggested schedule and why it is better"""
    suggested_schedule: str
    explanation: str
