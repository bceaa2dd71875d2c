"""
Shared fixtures and utilities for Pexels service tests.

Responses are served by httpx.MockTransport from the JSON fixtures in
fixtures/, which follow the shape of real /v1/collections and /v1/curated
responses.
"""

import json
import os
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

# Load fixtures from JSON files
FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Pytest hook to configure test environment before any tests run."""
    os.environ["ENVIRONMENT"] = "test"


def load_fixture(filename: str) -> dict:
    """Load a fixture from JSON file.

    Args:
        filename: Name of the fixture file

    Returns:
        Parsed JSON data

    Raises:
        FileNotFoundError: If fixture file doesn't exist
    """
    fixture_path = FIXTURES_DIR / filename
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture file not found: {fixture_path}")

    with open(fixture_path) as f:
        return json.load(f)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def mock_pexels_api_key():
    """Mock Pexels API key."""
    return "test_pexels_api_key_12345"


@pytest.fixture
def collection_transport():
    """Serves the collection fixture for any request."""
    data = load_fixture("collection_ofymzs7.json")
    return RecordingTransport(lambda request: httpx.Response(200, json=data))


@pytest.fixture
def curated_transport():
    """Serves the curated fixture for any request."""
    data = load_fixture("curated.json")
    return RecordingTransport(lambda request: httpx.Response(200, json=data))
