"""
Pytest configuration and shared fixtures.

Every test gets its own ``RecordStore`` and, for HTTP tests, its own
application built around it, so no state leaks between tests.
"""
import itertools

import pytest
from fastapi.testclient import TestClient

from skills_hub_api.app.core.config import Settings
from skills_hub_api.app.core.store import RecordStore
from skills_hub_api.app.main import create_app


@pytest.fixture
def store():
    """Empty store with case-folding enabled"""
    return RecordStore()


@pytest.fixture
def exact_store():
    """Empty store comparing skill tags by exact value"""
    return RecordStore(normalize_skills=False)


@pytest.fixture
def counting_ids():
    """Deterministic id factory: id-001, id-002, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter):03d}"


@pytest.fixture
def app_settings():
    return Settings(project_name="Skills Hub Test", api_version="9.9.9", log_level="WARNING")


@pytest.fixture
def client(app_settings, store):
    """Test client bound to the ``store`` fixture"""
    app = create_app(settings=app_settings, store=store)
    with TestClient(app) as test_client:
        yield test_client
