"""
Tests for the HTTP client, run in-process against the real app.
"""
import httpx
import pytest
import pytest_asyncio

from conftest import EXAMPLE_SESSION, EXAMPLE_SPOT
from surftracker.client import SurfTrackerClient, describe_error
from surftracker.main import create_app


@pytest_asyncio.fixture
async def api(settings):
    app = create_app(settings)
    await app.state.database.connect()
    transport = httpx.ASGITransport(app=app)
    async with SurfTrackerClient("http://testserver/api", transport=transport, settings=settings) as client:
        yield client
    await app.state.database.dispose()


@pytest.mark.asyncio
async def test_spot_round_trip(api):
    created = await api.create_spot(EXAMPLE_SPOT)

    assert created["name"] == "Test Point"
    assert [s["id"] for s in await api.list_spots()] == [created["id"]]
    assert (await api.get_spot(created["id"]))["break_type"] == "point"

    updated = await api.update_spot(created["id"], {"name": "Test Point North"})
    assert updated["name"] == "Test Point North"

    assert await api.delete_spot(created["id"]) is None
    assert await api.list_spots() == []


@pytest.mark.asyncio
async def test_session_round_trip(api):
    spot = await api.create_spot(EXAMPLE_SPOT)
    session = await api.create_session(EXAMPLE_SESSION)

    assert session["surf_spot_id"] == spot["id"]
    assert (await api.get_session(session["id"]))["spot_name"] == "Test Point"
    assert len(await api.list_sessions()) == 1
    assert len(await api.list_sessions_for_spot(spot["id"])) == 1

    updated = await api.update_session(session["id"], {"notes": "glassy"})
    assert updated["session_notes"] == "glassy"

    await api.delete_session(session["id"])
    assert await api.list_sessions() == []


@pytest.mark.asyncio
async def test_dashboard(api):
    stats = await api.get_dashboard()

    assert stats == {
        "totalSessions": 0,
        "avgRating": 0,
        "favoriteSpot": "No sessions yet",
        "recentSessions": [],
    }


@pytest.mark.asyncio
async def test_health_is_outside_api_prefix(api):
    """The health endpoint is served from the server root."""
    result = await api.health()

    assert result["status"] == "OK"
    assert result["database"]["status"] == "healthy"


@pytest.mark.asyncio
async def test_error_status_propagates(api):
    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        await api.get_spot(999)

    assert exc_info.value.response.status_code == 404
    assert describe_error(exc_info.value) == "Surf spot not found"


def test_describe_error_prefers_message_then_text():
    request = httpx.Request("GET", "http://testserver/api/dashboard")
    response = httpx.Response(500, json={"message": "Internal server error"}, request=request)
    error = httpx.HTTPStatusError("500 error", request=request, response=response)

    assert describe_error(error) == "Internal server error"
    assert describe_error(httpx.ConnectError("connection refused")) == "connection refused"
    assert describe_error(RuntimeError()) == "An unexpected error occurred"
