"""
STEM Tutor - Test Configuration
Pytest fixtures and configuration for testing
"""
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from stem_tutor.client.api import TutorApiClient
from stem_tutor.client.storage import LocalStorage
from stem_tutor.core.store import MemoryStore, StoreWriteError, default_documents, get_store
from stem_tutor.main import app


@pytest.fixture
def store() -> MemoryStore:
    """Fresh in-memory store with the default empty collections."""
    return MemoryStore(default_documents())


@pytest_asyncio.fixture(scope="function")
async def client(store: MemoryStore) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with the record store overridden."""
    app.dependency_overrides[get_store] = lambda: store
    
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
    
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def api(client: AsyncClient) -> AsyncGenerator[TutorApiClient, None]:
    """Typed API client talking to the in-process app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test/api"
    ) as http:
        yield TutorApiClient(client=http)


class ReadOnlyStore(MemoryStore):
    """Memory store whose every write fails, like a full or read-only disk."""
    
    async def write(self, collection: str, value: Any) -> None:
        raise StoreWriteError(collection, "disk full")


@pytest.fixture
def read_only_store() -> ReadOnlyStore:
    """Read-only store holding one flashcard and default progress."""
    documents = default_documents()
    documents["flashcards"] = [{
        "id": "card-1",
        "question": "What is 2 + 2?",
        "answer": "4",
        "subject": "math",
        "difficulty": "easy",
        "tags": [],
        "created": "2024-01-01T00:00:00.000Z",
        "timesReviewed": 0,
        "correctCount": 0,
        "lastReviewed": None,
    }]
    return ReadOnlyStore(documents)


@pytest_asyncio.fixture(scope="function")
async def read_only_client(read_only_store: ReadOnlyStore) -> AsyncGenerator[AsyncClient, None]:
    """Test client over a store that rejects every write."""
    app.dependency_overrides[get_store] = lambda: read_only_store
    
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
    
    app.dependency_overrides.clear()


@pytest.fixture
def local_storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "local")


@pytest.fixture
def sample_flashcard_data() -> dict[str, Any]:
    """Sample flashcard creation data."""
    return {
        "question": "What is the derivative of x^2?",
        "answer": "2x",
        "subject": "math",
        "difficulty": "hard",
        "tags": ["calculus", "derivatives"],
    }
