"""Fixtures shared by integration tests."""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_db_path() -> str:
    """Create a temporary database path, removed with its WAL files afterwards."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = f.name
    yield path
    Path(path).unlink(missing_ok=True)
    Path(f"{path}-wal").unlink(missing_ok=True)
    Path(f"{path}-shm").unlink(missing_ok=True)
