"""
STEM Tutor - Flashcards API Tests
"""
import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from stem_tutor.core.store import FLASHCARDS, MemoryStore, get_store
from stem_tutor.main import app


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test the health check endpoints."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "OK", "message": "STEM Tutor Backend is running"}
    
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_create_flashcard_round_trip(client: AsyncClient, sample_flashcard_data):
    """A created card is listed exactly once with the documented defaults."""
    response = await client.post("/api/flashcards", json=sample_flashcard_data)
    assert response.status_code == 201
    created = response.json()
    
    response = await client.get("/api/flashcards")
    assert response.status_code == 200
    cards = response.json()
    assert len(cards) == 1
    card = cards[0]
    assert card == created
    for field in ("question", "answer", "subject", "difficulty", "tags"):
        assert card[field] == sample_flashcard_data[field]
    assert card["id"]
    assert card["created"].endswith("Z")
    assert card["timesReviewed"] == 0
    assert card["correctCount"] == 0
    assert card["lastReviewed"] is None


@pytest.mark.asyncio
async def test_create_flashcard_defaults(client: AsyncClient):
    response = await client.post("/api/flashcards", json={
        "question": "H2O is?",
        "answer": "Water",
        "subject": "chemistry",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["difficulty"] == "medium"
    assert data["tags"] == []


@pytest.mark.asyncio
async def test_create_flashcard_missing_question(client: AsyncClient, store: MemoryStore):
    """A missing required field is a 400 and nothing is appended."""
    before = store.raw(FLASHCARDS)
    
    response = await client.post("/api/flashcards", json={"answer": "x", "subject": "math"})
    
    assert response.status_code == 400
    assert "question" in response.json()["detail"]
    assert store.raw(FLASHCARDS) == before


@pytest.mark.asyncio
async def test_create_flashcard_blank_fields_are_missing(client: AsyncClient):
    response = await client.post("/api/flashcards", json={"question": "  ", "answer": "", "subject": "math"})
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert "question" in detail
    assert "answer" in detail


@pytest.mark.asyncio
async def test_create_flashcard_invalid_difficulty(client: AsyncClient):
    response = await client.post("/api/flashcards", json={
        "question": "q", "answer": "a", "subject": "s", "difficulty": "impossible",
    })
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_flashcard_dedupes_tags(client: AsyncClient):
    response = await client.post("/api/flashcards", json={
        "question": "q", "answer": "a", "subject": "s", "tags": ["x", "y", "x"],
    })
    assert response.json()["tags"] == ["x", "y"]


@pytest.mark.asyncio
async def test_update_flashcard_preserves_omitted_fields(client: AsyncClient, sample_flashcard_data):
    created = (await client.post("/api/flashcards", json=sample_flashcard_data)).json()
    
    response = await client.put(f"/api/flashcards/{created['id']}", json={"answer": "2 * x", "tags": None})
    
    assert response.status_code == 200
    updated = response.json()
    assert updated["id"] == created["id"]
    assert updated["answer"] == "2 * x"
    assert updated["question"] == created["question"]
    assert updated["tags"] == created["tags"]
    assert updated["difficulty"] == created["difficulty"]
    assert updated["created"] == created["created"]
    assert updated["updated"] is not None


@pytest.mark.asyncio
async def test_update_flashcard_cannot_touch_id_or_counters(client: AsyncClient, sample_flashcard_data):
    created = (await client.post("/api/flashcards", json=sample_flashcard_data)).json()
    
    response = await client.put(f"/api/flashcards/{created['id']}", json={
        "id": "hijacked",
        "timesReviewed": 99,
        "question": "d/dx x^2?",
    })
    
    updated = response.json()
    assert updated["id"] == created["id"]
    assert updated["timesReviewed"] == 0
    assert updated["question"] == "d/dx x^2?"


@pytest.mark.asyncio
async def test_update_unknown_flashcard(client: AsyncClient):
    response = await client.put("/api/flashcards/nope", json={"question": "q"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Flashcard not found"


@pytest.mark.asyncio
async def test_update_flashcard_rejects_blank_required_field(client: AsyncClient, store: MemoryStore, sample_flashcard_data):
    created = (await client.post("/api/flashcards", json=sample_flashcard_data)).json()
    before = store.raw(FLASHCARDS)
    
    response = await client.put(f"/api/flashcards/{created['id']}", json={"question": "", "answer": "  "})
    
    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields: question, answer"
    assert store.raw(FLASHCARDS) == before


@pytest.mark.asyncio
async def test_delete_flashcard(client: AsyncClient, sample_flashcard_data):
    created = (await client.post("/api/flashcards", json=sample_flashcard_data)).json()
    
    response = await client.delete(f"/api/flashcards/{created['id']}")
    
    assert response.status_code == 200
    assert response.json() == {"message": "Flashcard deleted successfully"}
    assert (await client.get("/api/flashcards")).json() == []


@pytest.mark.asyncio
async def test_delete_unknown_flashcard_leaves_collection_unchanged(
    client: AsyncClient, store: MemoryStore, sample_flashcard_data
):
    await client.post("/api/flashcards", json=sample_flashcard_data)
    before = store.raw(FLASHCARDS)
    
    response = await client.delete("/api/flashcards/does-not-exist")
    
    assert response.status_code == 404
    assert store.raw(FLASHCARDS) == before


@pytest.mark.asyncio
async def test_review_counters_track_every_call(client: AsyncClient, sample_flashcard_data):
    created = (await client.post("/api/flashcards", json=sample_flashcard_data)).json()
    outcomes = [True, False, True, True, False]
    
    last_reviewed = []
    for correct in outcomes:
        response = await client.post(f"/api/flashcards/{created['id']}/review", json={"correct": correct})
        assert response.status_code == 200
        last_reviewed.append(response.json()["lastReviewed"])
    
    card = (await client.get("/api/flashcards")).json()[0]
    assert card["timesReviewed"] == len(outcomes)
    assert card["correctCount"] == outcomes.count(True)
    assert card["lastReviewed"] == last_reviewed[-1]
    assert last_reviewed == sorted(last_reviewed)


@pytest.mark.asyncio
async def test_review_without_body_counts_as_incorrect(client: AsyncClient, sample_flashcard_data):
    created = (await client.post("/api/flashcards", json=sample_flashcard_data)).json()
    
    response = await client.post(f"/api/flashcards/{created['id']}/review", json={})
    
    assert response.json()["timesReviewed"] == 1
    assert response.json()["correctCount"] == 0


@pytest.mark.asyncio
async def test_review_unknown_flashcard(client: AsyncClient):
    response = await client.post("/api/flashcards/nope/review", json={"correct": True})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_concurrent_creates_all_persist(client: AsyncClient):
    """Simultaneous creates against one collection never lose a record."""
    responses = await asyncio.gather(*(
        client.post("/api/flashcards", json={"question": f"q{i}", "answer": "a", "subject": "math"})
        for i in range(10)
    ))
    assert all(r.status_code == 201 for r in responses)
    
    cards = (await client.get("/api/flashcards")).json()
    assert sorted(card["question"] for card in cards) == sorted(f"q{i}" for i in range(10))
    assert len({card["id"] for card in cards}) == 10


@pytest.mark.asyncio
async def test_list_flashcards_store_failure(client: AsyncClient, store: MemoryStore):
    store.put_raw(FLASHCARDS, "{broken")
    
    response = await client.get("/api/flashcards")
    
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to access flashcards"


@pytest.mark.asyncio
async def test_create_does_not_overwrite_corrupt_collection(client: AsyncClient, store: MemoryStore, sample_flashcard_data):
    store.put_raw(FLASHCARDS, "{broken")
    
    response = await client.post("/api/flashcards", json=sample_flashcard_data)
    
    assert response.status_code == 500
    assert store.raw(FLASHCARDS) == "{broken"


@pytest.mark.asyncio
async def test_create_with_missing_collection_starts_empty(sample_flashcard_data):
    empty = MemoryStore()
    app.dependency_overrides[get_store] = lambda: empty
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            assert (await ac.get("/api/flashcards")).status_code == 500
            assert (await ac.post("/api/flashcards", json=sample_flashcard_data)).status_code == 201
            assert len((await ac.get("/api/flashcards")).json()) == 1
    finally:
        app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_failed_writes_report_store_error(read_only_client: AsyncClient, read_only_store: MemoryStore, sample_flashcard_data):
    before = read_only_store.raw(FLASHCARDS)
    
    responses = [
        await read_only_client.post("/api/flashcards", json=sample_flashcard_data),
        await read_only_client.put("/api/flashcards/card-1", json={"answer": "four"}),
        await read_only_client.post("/api/flashcards/card-1/review", json={"correct": True}),
        await read_only_client.delete("/api/flashcards/card-1"),
    ]
    
    for response in responses:
        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to access flashcards"}
    assert read_only_store.raw(FLASHCARDS) == before
    assert (await read_only_client.get("/api/flashcards")).json()[0]["timesReviewed"] == 0
