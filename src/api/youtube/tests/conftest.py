"""
Shared fixtures and utilities for YouTube service tests.

Responses in fixtures/ follow the shape of real channels.list,
playlistItems.list and videos.list responses from the YouTube Data API.
The discovery client is replaced by a MagicMock that serves them.
"""

import json
import os
from pathlib import Path
from unittest.mock import MagicMock

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


def _request(response: dict) -> MagicMock:
    request = MagicMock()
    request.execute.return_value = response
    return request


@pytest.fixture
def mock_youtube_api_key():
    """Mock YouTube API key."""
    return "test_youtube_api_key_12345"


@pytest.fixture
def mock_youtube_client():
    """Mock YouTube API client serving a two-page uploads playlist."""
    pages = {
        None: load_fixture("playlist_items_page1.json"),
        "EAAaBlBUOkNBSQ": load_fixture("playlist_items_page2.json"),
    }

    mock_client = MagicMock()
    mock_client.channels.return_value.list.return_value = _request(load_fixture("channels.json"))
    mock_client.playlistItems.return_value.list.side_effect = lambda **kwargs: _request(
        pages[kwargs.get("pageToken")]
    )
    mock_client.videos.return_value.list.return_value = _request(load_fixture("videos.json"))
    return mock_client
