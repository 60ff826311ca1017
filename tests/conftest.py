"""Shared pytest fixtures and configuration."""

import pytest

from coursereg.store import RegistrarStore

# Catalog used by the registration scenarios
SAMPLE_CATALOG = {"MATH101": 3, "ENGL101": 3, "HIST101": 4}


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def store():
    """Create an in-memory RegistrarStore."""
    s = RegistrarStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def seeded_store(store: RegistrarStore) -> RegistrarStore:
    """In-memory store with MATH101 (3), ENGL101 (3) and HIST101 (4)."""
    for code, credit_hours in SAMPLE_CATALOG.items():
        store.create_offering(code, credit_hours)
    return store
