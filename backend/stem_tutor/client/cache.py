"""
STEM Tutor - Client State Cache
Typed mirror of one collection in LocalStorage, seeded on first use.
"""
import logging
from importlib import resources
from pathlib import Path
from typing import Generic, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from stem_tutor.client.storage import LocalStorage

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Storage keys
COURSES_KEY = "courses"
SKILL_NODES_KEY = "skillNodes"
RECENT_TOPICS_KEY = "recentTopics"
SUBJECTS_KEY = "subjects"
FLASHCARDS_KEY = "flashcards"


def bundled_seed(filename: str) -> Path:
    """Path of a seed file shipped in ``stem_tutor/client/data``."""
    return Path(str(resources.files("stem_tutor.client") / "data" / filename))


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


class CollectionCache(Generic[ModelT]):
    """
    Working copy of a collection kept under one storage key.

    Every save re-serializes the whole list. Date strings in cached or
    seeded JSON come back as ``datetime`` values through the model.
    """

    def __init__(
        self,
        storage: LocalStorage,
        key: str,
        model: Type[ModelT],
        seed: str | Path | None = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.storage = storage
        self.key = key
        self.model = model
        self.seed = seed
        self.http = http
        self._adapter = TypeAdapter(List[model])

    def read_cached(self) -> Optional[List[ModelT]]:
        """Cached list, or None if nothing usable is stored under the key."""
        try:
            raw = self.storage.get_item(self.key)
        except UnicodeDecodeError as e:
            logger.warning("Ignoring undecodable %r cache: %s", self.key, e)
            return None
        if raw is None:
            return None
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring unreadable %r cache: %s", self.key, e.error_count())
            return None

    def save(self, items: List[ModelT]) -> None:
        self.storage.set_item(self.key, self._adapter.dump_json(items, by_alias=True).decode())

    def clear(self) -> None:
        self.storage.remove_item(self.key)

    async def load(self) -> List[ModelT]:
        """
        Cached list if present; otherwise the seed, which is then cached.

        Never raises for a missing or broken seed: the result is just empty.
        """
        cached = self.read_cached()
        if cached is not None:
            return cached
        if self.seed is None:
            return []

        items = await self.load_seed()
        if items:
            self.save(items)
        return items

    async def load_seed(self) -> List[ModelT]:
        logger.info("Loading %r seed from %s", self.key, self.seed)
        try:
            if is_url(self.seed):
                raw = await self._fetch(str(self.seed))
            else:
                raw = Path(self.seed).read_text(encoding="utf-8")
            return self._adapter.validate_json(raw)
        except (OSError, UnicodeDecodeError, httpx.HTTPError, ValidationError) as e:
            logger.error("Failed to load %r seed from %s: %s", self.key, self.seed, e)
            return []

    async def _fetch(self, url: str) -> str:
        if self.http is not None:
            response = await self.http.get(url)
            response.raise_for_status()
            return response.text
        async with httpx.AsyncClient() as http:
            response = await http.get(url)
            response.raise_for_status()
            return response.text
