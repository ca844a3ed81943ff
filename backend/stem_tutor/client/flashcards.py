"""
STEM Tutor - Flashcard Deck
Server-backed flashcards. The server is authoritative: local state is
replaced by each response and mirrored to storage only as a fallback.
"""
import logging
from typing import Any, List, Optional

import httpx

from stem_tutor.client.api import ApiError, TutorApiClient
from stem_tutor.client.cache import FLASHCARDS_KEY, CollectionCache
from stem_tutor.client.storage import LocalStorage
from stem_tutor.schemas.flashcard import FlashcardResponse

logger = logging.getLogger(__name__)

_CLIENT_ERRORS = (ApiError, httpx.HTTPError)


def accuracy(card: FlashcardResponse) -> Optional[float]:
    """Percentage of correct reviews, or None if the card was never reviewed."""
    if card.times_reviewed == 0:
        return None
    return round(card.correct_count * 100 / card.times_reviewed, 1)


class FlashcardDeck:

    def __init__(self, api: TutorApiClient, storage: LocalStorage):
        self.api = api
        self.cache: CollectionCache[FlashcardResponse] = CollectionCache(storage, FLASHCARDS_KEY, FlashcardResponse)
        self.cards: List[FlashcardResponse] = []

    def _mirror(self) -> None:
        self.cache.save(self.cards)

    def _replace(self, card: FlashcardResponse) -> None:
        self.cards = [card if existing.id == card.id else existing for existing in self.cards]
        self._mirror()

    async def refresh(self) -> bool:
        """Refetch everything; keep the mirrored copy if the server is unreachable."""
        try:
            self.cards = await self.api.list_flashcards()
        except _CLIENT_ERRORS as e:
            logger.warning("Failed to fetch flashcards: %s", e)
            cached = self.cache.read_cached()
            if cached is not None:
                self.cards = cached
            return False
        self._mirror()
        return True

    async def create(
        self,
        question: str,
        answer: str,
        subject: str,
        difficulty: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Optional[FlashcardResponse]:
        try:
            card = await self.api.create_flashcard(question, answer, subject, difficulty, tags)
        except _CLIENT_ERRORS as e:
            logger.warning("Failed to create flashcard: %s", e)
            return None
        self.cards.append(card)
        self._mirror()
        return card

    async def update(self, card_id: str, **fields: Any) -> Optional[FlashcardResponse]:
        try:
            card = await self.api.update_flashcard(card_id, **fields)
        except _CLIENT_ERRORS as e:
            logger.warning("Failed to update flashcard %s: %s", card_id, e)
            return None
        self._replace(card)
        return card

    async def delete(self, card_id: str) -> bool:
        try:
            await self.api.delete_flashcard(card_id)
        except ApiError as e:
            if not e.is_not_found:
                logger.warning("Failed to delete flashcard %s: %s", card_id, e)
                return False
            # Already gone on the server; drop the stale local copy too
        except httpx.HTTPError as e:
            logger.warning("Failed to delete flashcard %s: %s", card_id, e)
            return False
        self.cards = [card for card in self.cards if card.id != card_id]
        self._mirror()
        return True

    async def review(self, card_id: str, correct: bool) -> Optional[FlashcardResponse]:
        try:
            card = await self.api.review_flashcard(card_id, correct)
        except _CLIENT_ERRORS as e:
            logger.warning("Failed to record review for %s: %s", card_id, e)
            return None
        self._replace(card)
        return card

    def for_subject(self, subject_id: str) -> List[FlashcardResponse]:
        return [card for card in self.cards if card.subject == subject_id]
