"""
STEM Tutor - Progress API Tests
"""
import pytest
from httpx import ASGITransport, AsyncClient

from stem_tutor.core.store import DEFAULT_PROGRESS, PROGRESS, MemoryStore, get_store
from stem_tutor.main import app


@pytest.fixture
def existing_progress() -> dict:
    return {
        "totalXP": 100,
        "level": 2,
        "streak": 3,
        "lastActivity": "2024-03-01T08:00:00.000Z",
        "completedSkills": ["math-arithmetic"],
        "achievements": ["first-card"],
    }


@pytest.mark.asyncio
async def test_get_default_progress(client: AsyncClient):
    response = await client.get("/api/progress")
    assert response.status_code == 200
    assert response.json() == DEFAULT_PROGRESS


@pytest.mark.asyncio
async def test_merge_preserves_untouched_fields(client: AsyncClient, store: MemoryStore, existing_progress):
    await store.write(PROGRESS, existing_progress)
    
    response = await client.put("/api/progress", json={"totalXP": 150})
    
    assert response.status_code == 200
    assert response.json() == {**existing_progress, "totalXP": 150}
    assert await store.read(PROGRESS) == {**existing_progress, "totalXP": 150}


@pytest.mark.asyncio
async def test_progress_is_a_single_record(client: AsyncClient, store: MemoryStore):
    await client.put("/api/progress", json={"streak": 1})
    await client.put("/api/progress", json={"streak": 2, "completedSkills": ["a", "b", "a"]})
    
    stored = await store.read(PROGRESS)
    assert isinstance(stored, dict)
    assert stored["streak"] == 2
    assert stored["completedSkills"] == ["a", "b"]


@pytest.mark.asyncio
async def test_last_activity_can_be_cleared(client: AsyncClient, store: MemoryStore, existing_progress):
    await store.write(PROGRESS, existing_progress)
    
    data = (await client.put("/api/progress", json={"lastActivity": None, "level": None})).json()
    
    assert data["lastActivity"] is None
    assert data["level"] == 2


@pytest.mark.asyncio
async def test_progress_rejects_invalid_values(client: AsyncClient):
    assert (await client.put("/api/progress", json={"totalXP": -5})).status_code == 422
    assert (await client.put("/api/progress", json={"level": 0})).status_code == 422


@pytest.mark.asyncio
async def test_update_merges_over_defaults_when_missing():
    empty = MemoryStore()
    app.dependency_overrides[get_store] = lambda: empty
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            assert (await ac.get("/api/progress")).status_code == 500
            response = await ac.put("/api/progress", json={"totalXP": 10})
    finally:
        app.dependency_overrides.clear()
    
    assert response.status_code == 200
    assert response.json() == {**DEFAULT_PROGRESS, "totalXP": 10}


@pytest.mark.asyncio
async def test_failed_progress_write_reports_store_error(read_only_client: AsyncClient, read_only_store: MemoryStore):
    response = await read_only_client.put("/api/progress", json={"totalXP": 50})
    
    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to access progress"}
    assert (await read_only_client.get("/api/progress")).json() == DEFAULT_PROGRESS
