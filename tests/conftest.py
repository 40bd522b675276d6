"""Shared test fixtures and configuration for the test suite."""

from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Add the parent directory to the path for imports
import sys

sys.path.append(str(Path(__file__).parent.parent))

from tasktracker.config import Settings
from tasktracker.main import create_app
from tasktracker.services.persistence import TaskFileStorage
from tasktracker.services.task_store import TaskStore


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Create test settings with a temporary data file."""
    return Settings(
        data_file=tmp_path / "data" / "tasks.json",
        log_level="DEBUG",
        environment="test",
    )


@pytest.fixture
def storage(test_settings) -> TaskFileStorage:
    """Create snapshot storage backed by the temporary data file."""
    return TaskFileStorage(test_settings.data_file)


@pytest.fixture
def task_store(storage) -> TaskStore:
    """Create an empty task store for testing."""
    return TaskStore(storage)


@pytest.fixture
def client(test_settings) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


# Test data fixtures
@pytest.fixture
def sample_task_data():
    """Sample task data for testing."""
    return {"title": "Test Task", "description": "This is a test task description"}
