# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Pytest configuration and shared fixtures.

This module provides test fixtures that are shared across the test suite.

Assumptions:
- Each test gets a fresh application and TestClient
- Request logs go to a RecordingLogger so tests can inspect them
- Tests hash at the minimum bcrypt cost to stay fast
"""
import pytest
from fastapi.testclient import TestClient

from passhash.config import Settings
from passhash.main import create_app

FAST_COST = 4


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests of a single module")
    config.addinivalue_line("markers", "integration: tests through the HTTP app")
    config.addinivalue_line("markers", "hypothesis: property-based tests")


class RecordingLogger:
    """Stand-in for a structlog logger that keeps every event in memory."""
    
    def __init__(self):
        self.events = []
    
    def _record(self, level, event, **kwargs):
        self.events.append({"event": event, "level": level, **kwargs})
    
    def debug(self, event, **kwargs):
        self._record("debug", event, **kwargs)
    
    def info(self, event, **kwargs):
        self._record("info", event, **kwargs)
    
    def warning(self, event, **kwargs):
        self._record("warning", event, **kwargs)
    
    def error(self, event, **kwargs):
        self._record("error", event, **kwargs)
    
    def names(self):
        return [e["event"] for e in self.events]
    
    def find(self, event):
        return [e for e in self.events if e["event"] == event]


@pytest.fixture
def fast_cost():
    return FAST_COST


@pytest.fixture
def request_logger():
    """Logger injected into the app under test."""
    return RecordingLogger()


@pytest.fixture
def app_settings():
    """Settings with no cost bound (the default behaviour)."""
    return Settings(max_cost=None)


@pytest.fixture
def app(app_settings, request_logger):
    """Create a FastAPI application instance for testing.
    
    Returns:
        FastAPI: Application wired to the recording logger
    """
    return create_app(settings=app_settings, logger=request_logger)


@pytest.fixture
def client(app):
    """Create test client for the application.
    
    Returns:
        TestClient: FastAPI test client
    """
    return TestClient(app)


@pytest.fixture
def issued_hash(client, fast_cost):
    """A hash of "secret123" issued through the /hash endpoint."""
    response = client.post("/hash", data={"raw": "secret123", "cost": str(fast_cost)})
    assert response.status_code == 200
    return response.json()["data"]
