"""Fixtures for API route tests."""

import pytest
from fastapi.testclient import TestClient

from coursereg.api import create_app
from coursereg.api.dependencies import get_event_manager, get_service, get_store
from coursereg.api.events import EventManager
from coursereg.config import Settings
from coursereg.registration import RegistrationService
from coursereg.store import RegistrarStore


@pytest.fixture
def event_manager() -> EventManager:
    return EventManager()


@pytest.fixture
def service(seeded_store: RegistrarStore) -> RegistrationService:
    return RegistrationService(seeded_store, seeded_store)


@pytest.fixture
def client(
    seeded_store: RegistrarStore, service: RegistrationService, event_manager: EventManager
):
    """Test client for the app with its dependencies overridden.

    The lifespan is not entered, so no store is opened from settings.
    """
    app = create_app(Settings(db_path=":memory:"))

    def override_get_store():
        yield seeded_store

    def override_get_service():
        yield service

    def override_get_event_manager():
        yield event_manager

    app.dependency_overrides[get_store] = override_get_store
    app.dependency_overrides[get_service] = override_get_service
    app.dependency_overrides[get_event_manager] = override_get_event_manager

    return TestClient(app, raise_server_exceptions=False)
