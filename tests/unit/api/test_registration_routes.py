"""Unit tests for registration routes."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from coursereg.api.dependencies import get_service
from coursereg.api.events import EventManager, EventType
from coursereg.store import StoreUnavailableError


def _register(client: TestClient, learner_id: str, course_code: str):
    return client.post(
        "/api/v1/registrations", json={"learner_id": learner_id, "course_code": course_code}
    )


@pytest.mark.unit
class TestCreateRegistration:
    """Tests for POST /api/v1/registrations."""

    def test_accepted(self, client: TestClient) -> None:
        response = _register(client, "L1", "MATH101")

        assert response.status_code == 201
        body = response.json()
        assert body["error"] is None
        data = body["data"]
        assert data["accepted"] is True
        assert data["new_total"] == 3
        assert data["error_kind"] is None
        assert data["registration"]["course_code"] == "MATH101"
        assert data["registration"]["credit_hours"] == 3

    def test_credit_cap_exceeded(self, client: TestClient) -> None:
        """HIST101 is refused once MATH101 and ENGL101 are held."""
        _register(client, "L1", "MATH101")
        _register(client, "L1", "ENGL101")

        response = _register(client, "L1", "HIST101")

        assert response.status_code == 409
        body = response.json()
        assert body["data"] == {
            "accepted": False,
            "new_total": 6,
            "error_kind": "CreditCapExceeded",
            "registration": None,
        }
        assert body["error"] == "Failed to register for HIST101 (4), only 9 credits are allowed."

    def test_duplicate(self, client: TestClient) -> None:
        _register(client, "L1", "MATH101")

        response = _register(client, "L1", "MATH101")

        assert response.status_code == 409
        body = response.json()
        assert body["data"]["error_kind"] == "DuplicateRegistration"
        assert body["data"]["new_total"] == 3
        assert body["error"] == "Failed to register duplicate class: MATH101 (3)."

    def test_unknown_course(self, client: TestClient) -> None:
        response = _register(client, "L1", "NOPE404")

        assert response.status_code == 404
        assert response.json()["data"]["error_kind"] == "UnknownCourse"

    def test_missing_learner_id(self, client: TestClient) -> None:
        response = client.post("/api/v1/registrations", json={"course_code": "MATH101"})

        assert response.status_code == 400
        body = response.json()
        assert body["data"]["error_kind"] == "MissingLearnerId"
        assert body["data"]["new_total"] is None

    def test_learner_id_too_long(self, client: TestClient) -> None:
        response = _register(client, "L" * 256, "MATH101")

        assert response.status_code == 422

    def test_store_unavailable(self, client: TestClient) -> None:
        failing = MagicMock()
        failing.attempt_registration_async = AsyncMock(side_effect=StoreUnavailableError("down"))

        def override_get_service():
            yield failing

        client.app.dependency_overrides[get_service] = override_get_service

        response = _register(client, "L1", "MATH101")

        assert response.status_code == 503
        body = response.json()
        assert body["data"]["accepted"] is False
        assert body["data"]["error_kind"] == "StoreUnavailable"
        assert body["error"] == "Registration is temporarily unavailable. Please try again."

    def test_rejection_emits_event(
        self, client: TestClient, event_manager: EventManager
    ) -> None:
        subscriber = event_manager.subscribe(learner_id="L1")

        _register(client, "L1", "NOPE404")

        event = subscriber.queue.get_nowait()
        assert event.event_type == EventType.REGISTRATION_REJECTED
        assert event.data["error_kind"] == "UnknownCourse"
        assert event.data["course_code"] == "NOPE404"
