"""
API Dependencies
Common dependencies for FastAPI endpoints
"""

import random
from datetime import datetime
from typing import Optional
from fastapi import Depends, Header

from config import settings, tracker_config
from services.schedule_service import local_now
from services.tracker_service import SessionStore, TrackerState


def _seed_new_session(state: TrackerState) -> None:
    """Fill a fresh session with demo data when SEED_DEMO_DATA is on"""
    if not settings.SEED_DEMO_DATA:
        return
    from tools.history_simulator import seed_demo_state

    rng = random.Random(settings.DEMO_SEED) if settings.DEMO_SEED is not None else None
    seed_demo_state(state, adherence_rate=settings.DEMO_ADHERENCE_RATE, rng=rng)


session_store = SessionStore(
    initializer=_seed_new_session,
    max_sessions=settings.SESSION_MAX_COUNT,
    idle_ttl=settings.SESSION_IDLE_TTL_SECONDS,
)


def get_session_id(
    x_session_id: Optional[str] = Header(None, alias="X-Session-ID")
) -> str:
    """
    Session identifier from the X-Session-ID header
    Falls back to the shared default session
    """
    return x_session_id or tracker_config.DEFAULT_SESSION_ID


def get_state(session_id: str = Depends(get_session_id)) -> TrackerState:
    """Tracker state for the caller's session"""
    return session_store.get(session_id)


def get_now() -> datetime:
    """Current instant; overridden in tests for fixed clocks"""
    return local_now()


class ServiceDependency:
    """
    Dependency injection for services
    """

    @staticmethod
    def get_adherence_service():
        from services.adherence_service import adherence_service
        return adherence_service

    @staticmethod
    def get_schedule_service():
        from services.schedule_service import schedule_service
        return schedule_service

    @staticmethod
    def get_suggestion_service():
        from services.suggestion_service import suggestion_service
        return suggestion_service


# Service dependency instances
services = ServiceDependency()
