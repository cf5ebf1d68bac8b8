"""
Pytest Configuration and Shared Fixtures
========================================

This module provides shared fixtures for all DoseKeeper tests.
Fixtures include a fixed clock, tracker state, sample data, dose log
builders, a test client and a mocked suggestion backend.
"""

import os
import sys
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Generator, List
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from api import deps
from api.deps import get_now, services
from app import app
from models import DoseLog, DoseStatus, Medication
from services.suggestion_service import SuggestionService
from services.tracker_service import SessionStore, TrackerState


# ==================== CLOCK FIXTURES ====================

@pytest.fixture
def fixed_now() -> datetime:
    """A fixed, timezone-aware 'now' (Wednesday 15 May 2024, 10:30 UTC)"""
    return datetime(2024, 5, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def new_york_system_tz() -> Generator[None, None, None]:
    """Run with America/New_York as the process-wide local zone"""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    previous = os.environ.get("TZ")
    os.environ["TZ"] = "America/New_York"
    time.tzset()
    try:
        if datetime(2025, 1, 15, 12, 0).astimezone().utcoffset() != timedelta(hours=-5):
            pytest.skip("America/New_York zone data is not installed")
        yield
    finally:
        if previous is None:
            os.environ.pop("TZ", None)
        else:
            os.environ["TZ"] = previous
        time.tzset()


# ==================== STATE FIXTURES ====================

@pytest.fixture
def tracker_state(fixed_now: datetime) -> TrackerState:
    """Empty tracker state on the fixed clock"""
    return TrackerState(clock=lambda: fixed_now)


@pytest.fixture
def sample_medication_data() -> Dict[str, Any]:
    """Sample medication input"""
    return {
        "name": "Metformin",
        "dosage": "500mg",
        "form": "pill",
        "schedule": {"type": "daily", "times": ["09:00", "21:00"]},
        "instructions": "Take with meals",
    }


@pytest.fixture
def test_medication(tracker_state: TrackerState, sample_medication_data: Dict) -> Medication:
    """Metformin added to the tracker state"""
    return tracker_state.add_medication(sample_medication_data)


@pytest.fixture
def make_log() -> Callable[..., DoseLog]:
    """Factory for dose logs at a given action time"""
    counter = {"n": 0}

    def _make(
        action_time: datetime,
        status: DoseStatus = DoseStatus.TAKEN,
        medication_id: str = "med-1"
    ) -> DoseLog:
        counter["n"] += 1
        return DoseLog(
            id=f"log-{counter['n']}",
            medication_id=medication_id,
            scheduled_time=action_time,
            action_time=action_time,
            status=status,
        )

    return _make


@pytest.fixture
def adherence_history(fixed_now: datetime, make_log) -> List[DoseLog]:
    """3 taken + 1 skipped Metformin doses over the past two days"""
    yesterday = fixed_now - timedelta(days=1)
    return [
        make_log(yesterday.replace(hour=9, minute=0), DoseStatus.TAKEN),
        make_log(yesterday.replace(hour=21, minute=0), DoseStatus.SKIPPED),
        make_log(fixed_now.replace(hour=9, minute=0), DoseStatus.TAKEN),
        make_log((fixed_now - timedelta(days=2)).replace(hour=9, minute=0), DoseStatus.TAKEN),
    ]


# ==================== SUGGESTION FIXTURES ====================

@pytest.fixture
def suggestion_payload() -> Dict[str, str]:
    """A well-formed suggestion request"""
    return {
        "medicationName": "Metformin",
        "currentSchedule": "Daily at 09:00, 21:00",
        "adherenceData": "User has taken 3 doses and skipped 1 doses for Metformin.",
        "userDailyRoutine": "I wake up at 7 AM and have dinner at 7 PM.",
    }


@pytest.fixture
def mock_backend() -> AsyncMock:
    """Simulated suggestion service returning a valid two-field reply"""
    return AsyncMock(return_value={
        "suggestedSchedule": "08:00 with breakfast and 19:00 with dinner",
        "explanation": "Pairing doses with meals matches your routine.",
    })


# ==================== API FIXTURES ====================

@pytest.fixture
def session_store(monkeypatch) -> SessionStore:
    """Fresh, unseeded session store for each test"""
    store = SessionStore()
    monkeypatch.setattr(deps, "session_store", store)
    return store


@pytest.fixture
def client(session_store: SessionStore, fixed_now: datetime, mock_backend) -> Generator[TestClient, None, None]:
    """FastAPI test client on the fixed clock with a simulated LLM"""
    app.dependency_overrides[get_now] = lambda: fixed_now
    app.dependency_overrides[services.get_suggestion_service] = (
        lambda: SuggestionService(backend=mock_backend, timeout=5)
    )

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==================== MARKERS ====================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "api: mark test as an API test")
