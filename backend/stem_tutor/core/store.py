"""
STEM Tutor - Record Store
Whole-document JSON storage, one document per named collection.

Every mutation reads the entire collection, changes it in memory and writes
the entire collection back. Callers must hold ``store.lock(collection)``
across that read-modify-write or concurrent requests lose each other's edits.
"""
import asyncio
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Any

from stem_tutor.core.config import settings

logger = logging.getLogger(__name__)

FLASHCARDS = "flashcards"
SUBJECTS = "subjects"
PROGRESS = "progress"

DEFAULT_PROGRESS: dict[str, Any] = {
    "totalXP": 0,
    "level": 1,
    "streak": 0,
    "lastActivity": None,
    "completedSkills": [],
    "achievements": [],
}


def default_documents() -> dict[str, Any]:
    """Initial document for each built-in collection."""
    return {
        FLASHCARDS: [],
        SUBJECTS: [],
        PROGRESS: dict(DEFAULT_PROGRESS),
    }


class StoreError(Exception):
    """Base record store error."""

    def __init__(self, collection: str, message: str):
        self.collection = collection
        super().__init__(f"{collection}: {message}")


class CollectionNotFoundError(StoreError):
    """The collection document does not exist."""
    pass


class StoreReadError(StoreError):
    """The collection document exists but could not be read or parsed."""
    pass


class StoreWriteError(StoreError):
    """The collection document could not be written."""
    pass


def dump_document(value: Any) -> str:
    """Serialize a document deterministically."""
    return json.dumps(value, indent=2, ensure_ascii=False) + "\n"


class RecordStore(ABC):
    """Storage abstraction injected into the resource services."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def lock(self, collection: str) -> asyncio.Lock:
        """
        Get the mutual-exclusion lock for a collection.

        Usage:
            async with store.lock("flashcards"):
                cards = await store.read("flashcards")
                ...
                await store.write("flashcards", cards)
        """
        if collection not in self._locks:
            self._locks[collection] = asyncio.Lock()
        return self._locks[collection]

    @abstractmethod
    async def read(self, collection: str) -> Any:
        """
        Read and parse a whole collection document.

        Raises:
            CollectionNotFoundError: If the document does not exist
            StoreReadError: If the document cannot be read or parsed
        """

    @abstractmethod
    async def write(self, collection: str, value: Any) -> None:
        """
        Replace a whole collection document.

        Raises:
            StoreWriteError: If the document cannot be written
        """

    @abstractmethod
    async def exists(self, collection: str) -> bool:
        """Check whether a collection document exists."""

    @abstractmethod
    async def list_collections(self) -> list[str]:
        """Names of all stored collections, sorted."""

    async def read_or(self, collection: str, default: Any) -> Any:
        """Read a collection, falling back to ``default`` only when it is missing."""
        try:
            return await self.read(collection)
        except CollectionNotFoundError:
            return default

    async def ensure_defaults(self) -> list[str]:
        """Create any missing built-in collection. Returns the names created."""
        created = []
        for collection, value in default_documents().items():
            async with self.lock(collection):
                if not await self.exists(collection):
                    await self.write(collection, value)
                    created.append(collection)
        return created


class JsonFileStore(RecordStore):
    """Collections stored as ``<data_dir>/<collection>.json``."""

    def __init__(self, data_dir: Path | str):
        super().__init__()
        self.data_dir = Path(data_dir)

    def path_for(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    async def read(self, collection: str) -> Any:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self._read_sync, collection)

    async def write(self, collection: str, value: Any) -> None:
        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, self._write_sync, collection, value)

    async def exists(self, collection: str) -> bool:
        return self.path_for(collection).is_file()

    async def list_collections(self) -> list[str]:
        if not self.data_dir.is_dir():
            return []
        return sorted(p.stem for p in self.data_dir.glob("*.json"))

    def _read_sync(self, collection: str) -> Any:
        path = self.path_for(collection)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise CollectionNotFoundError(collection, f"{path} does not exist")
        except OSError as e:
            logger.error("Error reading %s: %s", path, e)
            raise StoreReadError(collection, str(e)) from e

        try:
            return json.loads(raw)
        except ValueError as e:
            logger.error("Error parsing %s: %s", path, e)
            raise StoreReadError(collection, f"invalid JSON: {e}") from e

    def _write_sync(self, collection: str, value: Any) -> None:
        path = self.path_for(collection)
        try:
            payload = dump_document(value)
        except (TypeError, ValueError) as e:
            raise StoreWriteError(collection, f"not serializable: {e}") from e

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            # Write beside the target then rename, so readers never see half a file
            fd, tmp_name = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{collection}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error("Error writing %s: %s", path, e)
            raise StoreWriteError(collection, str(e)) from e


class MemoryStore(RecordStore):
    """
    In-process store for tests and throwaway runs.

    Documents are kept serialized so callers never share mutable state
    with the store, mirroring what a file round trip does.
    """

    def __init__(self, documents: dict[str, Any] | None = None):
        super().__init__()
        self._documents: dict[str, str] = {}
        for collection, value in (documents or {}).items():
            self._documents[collection] = dump_document(value)

    async def read(self, collection: str) -> Any:
        # Yield like real I/O does, so interleavings are observable in tests
        await asyncio.sleep(0)
        if collection not in self._documents:
            raise CollectionNotFoundError(collection, "not in memory store")
        try:
            return json.loads(self._documents[collection])
        except ValueError as e:
            raise StoreReadError(collection, f"invalid JSON: {e}") from e

    async def write(self, collection: str, value: Any) -> None:
        await asyncio.sleep(0)
        try:
            self._documents[collection] = dump_document(value)
        except (TypeError, ValueError) as e:
            raise StoreWriteError(collection, f"not serializable: {e}") from e

    async def exists(self, collection: str) -> bool:
        return collection in self._documents

    async def list_collections(self) -> list[str]:
        return sorted(self._documents)

    def raw(self, collection: str) -> str | None:
        """Serialized document text, for byte-level assertions."""
        return self._documents.get(collection)

    def put_raw(self, collection: str, text: str) -> None:
        """Store document text verbatim, e.g. to simulate corruption."""
        self._documents[collection] = text


@lru_cache
def get_store() -> RecordStore:
    """
    Dependency returning the process-wide record store.

    Usage:
        @router.get("/items")
        async def get_items(store: RecordStore = Depends(get_store)):
            ...
    """
    return JsonFileStore(settings.DATA_DIR)
