"""
STEM Tutor - Sidebar
Subjects come from the server and are refetched on every refresh; recent
topics live only in local storage.
"""
import json
import logging
import random
from typing import List, Optional

import httpx

from stem_tutor.client.api import ApiError, TutorApiClient
from stem_tutor.client.cache import RECENT_TOPICS_KEY, SUBJECTS_KEY, CollectionCache
from stem_tutor.client.storage import LocalStorage
from stem_tutor.schemas.subject import DEFAULT_ICON, SubjectResponse

logger = logging.getLogger(__name__)

SUBJECT_COLORS = [
    "bg-blue-500",
    "bg-green-500",
    "bg-purple-500",
    "bg-orange-500",
    "bg-red-500",
    "bg-emerald-500",
]
MAX_RECENT_TOPICS = 5


class Sidebar:
    """Subject list, current subject selection and recent topics."""

    def __init__(
        self,
        api: TutorApiClient,
        storage: LocalStorage,
        rng: Optional[random.Random] = None,
    ):
        self.api = api
        self.storage = storage
        self.rng = rng or random.Random()
        self.cache: CollectionCache[SubjectResponse] = CollectionCache(storage, SUBJECTS_KEY, SubjectResponse)
        self.subjects: List[SubjectResponse] = []
        self.selected_subject_id: Optional[str] = None
        self.recent_topics: List[str] = []

    async def mount(self) -> None:
        await self.refresh_subjects()
        self.load_recent_topics()

    async def refresh_subjects(self) -> bool:
        """
        Replace local subjects with the server's list.

        On failure the last mirrored copy is shown instead. Returns whether
        the server answered.
        """
        try:
            subjects = await self.api.list_subjects()
        except (ApiError, httpx.HTTPError) as e:
            logger.warning("Failed to fetch subjects: %s", e)
            cached = self.cache.read_cached()
            if cached is not None:
                self.subjects = cached
            return False

        self.subjects = subjects
        self.cache.save(subjects)
        if subjects and not self.selected_subject_id:
            self.selected_subject_id = subjects[0].id
        return True

    async def create_subject(self, name: str) -> Optional[SubjectResponse]:
        """Create a subject with a random palette color. Blank names are ignored."""
        if not name.strip():
            return None
        try:
            subject = await self.api.create_subject(
                name=name,
                icon=DEFAULT_ICON,
                color=self.rng.choice(SUBJECT_COLORS),
            )
        except (ApiError, httpx.HTTPError) as e:
            logger.warning("Failed to create subject: %s", e)
            return None

        self.subjects.append(subject)
        self.cache.save(self.subjects)
        if not self.selected_subject_id:
            self.selected_subject_id = subject.id
        return subject

    def select_subject(self, subject_id: str) -> None:
        self.selected_subject_id = subject_id

    @property
    def selected_subject(self) -> Optional[SubjectResponse]:
        return next((s for s in self.subjects if s.id == self.selected_subject_id), None)

    def load_recent_topics(self) -> List[str]:
        topics: List[str] = []
        try:
            raw = self.storage.get_item(RECENT_TOPICS_KEY)
        except UnicodeDecodeError:
            raw = None
            logger.warning("Ignoring undecodable recent topics")
        if raw is not None:
            try:
                loaded = json.loads(raw)
            except ValueError:
                logger.warning("Ignoring unreadable recent topics")
            else:
                if isinstance(loaded, list):
                    topics = [str(topic) for topic in loaded]
        self.recent_topics = topics
        return topics

    def add_recent_topic(self, topic: str) -> List[str]:
        """Move ``topic`` to the front, keeping at most five distinct topics."""
        topic = topic.strip()
        if not topic:
            return self.recent_topics
        topics = [topic] + [t for t in self.recent_topics if t != topic]
        self.recent_topics = topics[:MAX_RECENT_TOPICS]
        self.storage.set_item(RECENT_TOPICS_KEY, json.dumps(self.recent_topics))
        return self.recent_topics
