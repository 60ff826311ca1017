"""Unit tests for learner routes."""

import pytest
from fastapi.testclient import TestClient

from coursereg.store import RegistrarStore, Registration


@pytest.mark.unit
class TestLearnerRegistrations:
    """Tests for GET /api/v1/learners/{learner_id}/registrations."""

    def test_no_registrations(self, client: TestClient) -> None:
        response = client.get("/api/v1/learners/L1/registrations")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["learner_id"] == "L1"
        assert data["total_credit_hours"] == 0
        assert data["credit_cap"] == 9
        assert data["registrations"] == []

    def test_registrations_in_order(
        self, client: TestClient, seeded_store: RegistrarStore
    ) -> None:
        seeded_store.append(Registration("L1", "MATH101", 3))
        seeded_store.append(Registration("L1", "HIST101", 4))
        seeded_store.append(Registration("L2", "ENGL101", 3))

        response = client.get("/api/v1/learners/L1/registrations")

        data = response.json()["data"]
        assert data["total_credit_hours"] == 7
        assert [r["course_code"] for r in data["registrations"]] == ["MATH101", "HIST101"]
        assert data["registrations"][0]["registered_at"] is not None

    def test_blank_learner_id(self, client: TestClient) -> None:
        response = client.get("/api/v1/learners/%20/registrations")

        assert response.status_code == 400
        body = response.json()
        assert body["data"]["error_kind"] == "MissingLearnerId"
        assert body["error"] == "Please enter a Learner ID."


@pytest.mark.unit
class TestCreditTotal:
    """Tests for GET /api/v1/learners/{learner_id}/total."""

    def test_total(self, client: TestClient, seeded_store: RegistrarStore) -> None:
        seeded_store.append(Registration("L1", "MATH101", 3))
        seeded_store.append(Registration("L1", "ENGL101", 3))

        response = client.get("/api/v1/learners/L1/total")

        assert response.status_code == 200
        assert response.json()["data"] == {"learner_id": "L1", "total_credit_hours": 6}

    def test_total_unknown_learner_is_zero(self, client: TestClient) -> None:
        response = client.get("/api/v1/learners/nobody/total")

        assert response.json()["data"]["total_credit_hours"] == 0
