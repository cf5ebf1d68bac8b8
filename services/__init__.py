"""
Services Module
Business logic layer for the DoseKeeper application
"""

from services.llm_service import LLMService, llm_service
from services.adherence_service import AdherenceService, adherence_service
from services.schedule_service import ScheduleService, schedule_service
from services.suggestion_service import SuggestionService, suggestion_service
from services.tracker_service import SessionStore, TrackerState


__all__ = [
    # Service classes
    "LLMService",
    "AdherenceService",
    "ScheduleService",
    "SuggestionService",
    "SessionStore",
    "TrackerState",
    # Singleton instances
    "llm_service",
    "adherence_service",
    "schedule_service",
    "suggestion_service",
]
