"""
Shared fixtures for service, repository and web tests.

FakeRepository is an in-memory ContentRepository with the same failure
modes as the real stores: unique ids per table, and PersistenceError on
demand for selected ids or whole operations.
"""

import json
import os
from pathlib import Path
from typing import Any

import pytest

from contracts.errors import PersistenceError

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Pytest hook to configure test environment before any tests run."""
    os.environ["ENVIRONMENT"] = "test"


def load_fixture(filename: str) -> Any:
    fixture_path = FIXTURES_DIR / filename
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture file not found: {fixture_path}")

    with open(fixture_path) as f:
        return json.load(f)


class FakeRepository:
    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None):
        self.tables: dict[str, list[dict[str, Any]]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self.fail_insert_ids: set[str] = set()
        self.fail_select = False
        self.insert_calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.setdefault(table, [])

    async def select(self, table, filters=None, order_by=None, descending=True, limit=None):
        if self.fail_select:
            raise PersistenceError(f"select {table} failed")
        rows = [
            dict(row)
            for row in self.rows(table)
            if all(row.get(k) == v for k, v in (filters or {}).items())
        ]
        if order_by:
            rows.sort(key=lambda row: str(row.get(order_by) or ""), reverse=descending)
        return rows[:limit] if limit else rows

    async def get(self, table, key_column, key):
        for row in self.rows(table):
            if row.get(key_column) == key:
                return dict(row)
        return None

    async def insert(self, table, row):
        self.insert_calls.append((table, dict(row)))
        if row.get("id") in self.fail_insert_ids:
            raise PersistenceError(f"insert of {row['id']} failed")
        if row.get("id") and any(r.get("id") == row["id"] for r in self.rows(table)):
            raise PersistenceError(f"duplicate key value violates unique constraint ({row['id']})")
        stored = dict(row)
        stored.setdefault("id", f"{table}-{len(self.rows(table)) + 1}")
        self.rows(table).append(stored)
        return dict(stored)

    async def update(self, table, key_column, key, changes):
        for row in self.rows(table):
            if row.get(key_column) == key:
                row.update(changes)
                return dict(row)
        return None

    async def update_where(self, table, filters, changes):
        count = 0
        for row in self.rows(table):
            if all(row.get(k) == v for k, v in filters.items()):
                row.update(changes)
                count += 1
        return count

    async def delete(self, table, key_column, key):
        rows = self.rows(table)
        for i, row in enumerate(rows):
            if row.get(key_column) == key:
                del rows[i]
                return True
        return False

    async def count(self, table):
        return len(self.rows(table))

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_repo():
    return FakeRepository()


@pytest.fixture
def settings():
    from adapters.config import Settings

    return Settings(
        pexels_api_key="test_pexels_key",
        pexels_collection_id="ofymzs7",
        youtube_api_key="test_youtube_key",
        youtube_channel_id="UCq8xW3kYH6uWnK0ZzR1bT0g",
        supabase_url="https://example.supabase.co",
        supabase_service_role_key="service-role-key",
        admin_api_key="admin-secret",
        environment="test",
        vlog_read_timeout=0.2,
    )


@pytest.fixture
def registry(settings, fake_repo):
    from adapters.repository import RepositoryRegistry

    return RepositoryRegistry(settings, overrides={"supabase": fake_repo})


@pytest.fixture
def make_repo():
    """Factory for a FakeRepository pre-filled with table rows."""
    return FakeRepository


@pytest.fixture
def pexels_photos():
    from api.pexels.models import PexelsPhoto

    return [PexelsPhoto.model_validate(item) for item in load_fixture("pexels_photos.json")]


@pytest.fixture
def youtube_videos():
    from api.youtube.models import YouTubeVideoItem

    return [YouTubeVideoItem.model_validate(item) for item in load_fixture("youtube_videos.json")]


class FakeRedis:
    """Dict-backed stand-in for the synchronous redis.Redis client."""

    def __init__(self):
        self.store: dict[str, bytes] = {}
        self.ttls: dict[str, int] = {}
        self.closed = False

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, ex=None):
        self.store[key] = value
        self.ttls[key] = ex
        return True

    def delete(self, *keys):
        removed = 0
        for key in keys:
            key = key.decode() if isinstance(key, bytes) else key
            removed += self.store.pop(key, None) is not None
        return removed

    def scan(self, cursor=0, match=None, count=None):
        prefix = (match or "*").rstrip("*")
        return 0, [key.encode() for key in self.store if key.startswith(prefix)]

    def close(self):
        self.closed = True


@pytest.fixture
def fake_redis():
    return FakeRedis()
