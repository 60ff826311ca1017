"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from coursereg.api.events import EventManager
from coursereg.registration import RegistrationService
from coursereg.store import RegistrarStore

if TYPE_CHECKING:
    from coursereg.config import Settings

# Global RegistrarStore instance (initialized on app startup)
_store: RegistrarStore | None = None


def init_store(settings: Settings) -> RegistrarStore:
    """Initialize the global RegistrarStore instance."""
    global _store  # noqa: PLW0603
    _store = RegistrarStore(settings.db_path, db_url=settings.db_url)
    return _store


def close_store() -> None:
    """Close the global RegistrarStore instance."""
    global _store  # noqa: PLW0603
    if _store is not None:
        _store.close()
        _store = None


def get_store() -> Generator[RegistrarStore, None, None]:
    """Dependency that provides the RegistrarStore instance."""
    if _store is None:
        raise RuntimeError("RegistrarStore not initialized. Call init_store() first.")
    yield _store


# Type alias for dependency injection
StoreDep = Annotated[RegistrarStore, Depends(get_store)]

# Global RegistrationService instance (initialized on app startup)
_service: RegistrationService | None = None


def init_service(service: RegistrationService) -> None:
    """Initialize the global RegistrationService instance."""
    global _service  # noqa: PLW0603
    _service = service


def close_service() -> None:
    """Close the global RegistrationService instance."""
    global _service  # noqa: PLW0603
    _service = None


def get_service() -> Generator[RegistrationService, None, None]:
    """Dependency that provides the RegistrationService instance."""
    if _service is None:
        raise RuntimeError("RegistrationService not initialized. Call init_service() first.")
    yield _service


# Type alias for dependency injection
ServiceDep = Annotated[RegistrationService, Depends(get_service)]

# Global EventManager instance
_event_manager: EventManager | None = None


def init_event_manager() -> EventManager:
    """Initialize the global EventManager instance."""
    global _event_manager  # noqa: PLW0603
    _event_manager = EventManager()
    return _event_manager


def get_event_manager() -> Generator[EventManager, None, None]:
    """Dependency that provides the EventManager instance."""
    if _event_manager is None:
        raise RuntimeError("EventManager not initialized. Call init_event_manager() first.")
    yield _event_manager


# Type alias for dependency injection
EventManagerDep = Annotated[EventManager, Depends(get_event_manager)]
