"""
Tests for Suggestions API
==========================

Tests smart schedule suggestions with a simulated LLM.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi import status
from fastapi.testclient import TestClient

from api.deps import services
from app import app
from services.suggestion_service import SuggestionService


# ==================== FIXTURES ====================

@pytest.fixture
def failing_suggestions(client: TestClient):
    """Route suggestions to a backend that is down"""
    backend = AsyncMock(side_effect=ConnectionError("connection refused"))
    app.dependency_overrides[services.get_suggestion_service] = (
        lambda: SuggestionService(backend=backend, timeout=5)
    )
    return backend


# ==================== FREE-TEXT TESTS ====================

class TestSuggestSchedule:
    """Tests for the free-text suggestion endpoint"""

    @pytest.mark.api
    def test_suggestion_success(self, client: TestClient, suggestion_payload, mock_backend):
        """Test a suggestion is returned in camelCase"""
        response = client.post("/api/v1/suggestions/schedule", json=suggestion_payload)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["suggestedSchedule"] == "08:00 with breakfast and 19:00 with dinner"
        assert data["explanation"]
        mock_backend.assert_awaited_once()

    @pytest.mark.api
    def test_missing_field(self, client: TestClient, suggestion_payload, mock_backend):
        """Test incomplete requests never reach the model"""
        suggestion_payload["userDailyRoutine"] = ""

        response = client.post("/api/v1/suggestions/schedule", json=suggestion_payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_backend.assert_not_awaited()

    @pytest.mark.api
    def test_backend_failure(self, client: TestClient, suggestion_payload, failing_suggestions):
        """Test an unavailable model maps to 502"""
        response = client.post("/api/v1/suggestions/schedule", json=suggestion_payload)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["message"] == (
            "Could not generate a smart schedule suggestion. Please try again."
        )

    @pytest.mark.api
    def test_malformed_reply(self, client: TestClient, suggestion_payload):
        """Test a reply without an explanation maps to 502"""
        backend = AsyncMock(return_value={"suggestedSchedule": "08:00"})
        app.dependency_overrides[services.get_suggestion_service] = (
            lambda: SuggestionService(backend=backend, timeout=5)
        )

        response = client.post("/api/v1/suggestions/schedule", json=suggestion_payload)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY


# ==================== STORED MEDICATION TESTS ====================

class TestSuggestForMedication:
    """Tests for suggestions on a stored medication"""

    @pytest.mark.api
    def test_uses_dose_history(self, client: TestClient, sample_medication_data, mock_backend):
        """Test the request is built from the medication and its logs"""
        med_id = client.post("/api/v1/medications", json=sample_medication_data).json()["id"]
        client.post(f"/api/v1/medications/{med_id}/doses", json={"status": "skipped"})

        response = client.post(
            f"/api/v1/medications/{med_id}/suggestion",
            json={"userDailyRoutine": "Night shifts, asleep until 2 PM."},
        )

        assert response.status_code == status.HTTP_200_OK
        request = mock_backend.await_args.args[0]
        assert request.medication_name == "Metformin"
        assert request.current_schedule == "Daily at 09:00, 21:00"
        assert request.adherence_data == "User has taken 0 doses and skipped 1 doses for Metformin."
        assert request.user_daily_routine == "Night shifts, asleep until 2 PM."

    @pytest.mark.api
    def test_default_routine(self, client: TestClient, sample_medication_data, mock_backend):
        """Test an empty body falls back to the default routine"""
        med_id = client.post("/api/v1/medications", json=sample_medication_data).json()["id"]

        response = client.post(f"/api/v1/medications/{med_id}/suggestion", json={})

        assert response.status_code == status.HTTP_200_OK
        assert mock_backend.await_args.args[0].user_daily_routine

    @pytest.mark.api
    def test_routine_too_short(self, client: TestClient, sample_medication_data, mock_backend):
        """Test a routine under ten characters is rejected"""
        med_id = client.post("/api/v1/medications", json=sample_medication_data).json()["id"]

        response = client.post(
            f"/api/v1/medications/{med_id}/suggestion", json={"userDailyRoutine": "Busy"}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_backend.assert_not_awaited()

    @pytest.mark.api
    def test_unknown_medication(self, client: TestClient):
        """Test suggesting for a missing medication"""
        response = client.post("/api/v1/medications/med-missing/suggestion", json={})

        assert response.status_code == status.HTTP_404_NOT_FOUND


# ==================== HEALTH TESTS ====================

class TestHealth:
    """Tests for service endpoints"""

    @pytest.mark.api
    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"
        assert set(response.json()["llm_usage"]) == {"total_tokens", "request_count", "model"}
