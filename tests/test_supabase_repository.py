"""
Unit tests for the Supabase PostgREST repository, using httpx.MockTransport.
"""

import json

import httpx
import pytest

from adapters.supabase_repository import SupabaseRepository
from contracts.errors import PersistenceError

pytestmark = pytest.mark.unit

BASE_URL = "https://example.supabase.co"


def make_repo(handler):
    requests: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    repo = SupabaseRepository(BASE_URL, "service-key", transport=httpx.MockTransport(recording))
    return repo, requests


@pytest.mark.asyncio
async def test_select_builds_postgrest_query():
    repo, requests = make_repo(lambda request: httpx.Response(200, json=[{"id": "1"}]))

    rows = await repo.select("vlogs", filters={"featured": True}, order_by="created_at", limit=5)

    assert rows == [{"id": "1"}]
    request = requests[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/vlogs"
    assert request.url.params["featured"] == "eq.true"
    assert request.url.params["order"] == "created_at.desc"
    assert request.url.params["limit"] == "5"
    assert request.headers["apikey"] == "service-key"
    assert request.headers["authorization"] == "Bearer service-key"
    await repo.close()


@pytest.mark.asyncio
async def test_get_returns_none_when_absent():
    repo, requests = make_repo(lambda request: httpx.Response(200, json=[]))

    assert await repo.get("posts", "slug", "missing") is None
    assert requests[0].url.params["slug"] == "eq.missing"


@pytest.mark.asyncio
async def test_insert_asks_for_representation():
    def handler(request):
        body = json.loads(request.content)
        return httpx.Response(201, json=[{**body[0], "created_at": "2024-01-01"}])

    repo, requests = make_repo(handler)

    created = await repo.insert("photography", {"id": "pexels-1", "src": "/a.jpg"})

    assert created == {"id": "pexels-1", "src": "/a.jpg", "created_at": "2024-01-01"}
    assert requests[0].method == "POST"
    assert requests[0].headers["prefer"] == "return=representation"


@pytest.mark.asyncio
async def test_unique_violation_is_persistence_error():
    repo, _ = make_repo(
        lambda request: httpx.Response(
            409, json={"code": "23505", "message": "duplicate key value violates unique constraint"}
        )
    )

    with pytest.raises(PersistenceError, match="409"):
        await repo.insert("vlogs", {"id": "youtube-1"})


@pytest.mark.asyncio
async def test_transport_error_is_persistence_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    repo, _ = make_repo(handler)

    with pytest.raises(PersistenceError, match="connection refused"):
        await repo.select("posts")


@pytest.mark.asyncio
async def test_update_where_counts_rows():
    repo, requests = make_repo(lambda request: httpx.Response(200, json=[{"id": "1"}, {"id": "2"}]))

    count = await repo.update_where("vlogs", {"category": "Daily Life"}, {"category": "Daily"})

    assert count == 2
    assert requests[0].method == "PATCH"
    assert requests[0].url.params["category"] == "eq.Daily Life"
    assert json.loads(requests[0].content) == {"category": "Daily"}


@pytest.mark.asyncio
async def test_update_and_delete_missing_row():
    repo, _ = make_repo(lambda request: httpx.Response(200, json=[]))

    assert await repo.update("vlogs", "id", "404", {"title": "x"}) is None
    assert await repo.delete("vlogs", "id", "404") is False


@pytest.mark.asyncio
async def test_count_reads_content_range():
    repo, requests = make_repo(lambda request: httpx.Response(200, headers={"Content-Range": "0-24/57"}))

    assert await repo.count("photography") == 57
    assert requests[0].method == "HEAD"
    assert requests[0].headers["prefer"] == "count=exact"


@pytest.mark.asyncio
async def test_count_rejects_missing_content_range():
    repo, _ = make_repo(lambda request: httpx.Response(200))

    with pytest.raises(PersistenceError):
        await repo.count("photography")
