"""
STEM Tutor - Flashcard Service
Create, update, delete and review flashcards in the ``flashcards`` collection
"""
import logging
import uuid

from stem_tutor.core.clock import utc_now_iso
from stem_tutor.core.store import FLASHCARDS, RecordStore, StoreReadError
from stem_tutor.schemas.flashcard import (
    FlashcardCreate,
    FlashcardDifficulty,
    FlashcardReview,
    FlashcardUpdate,
)
from stem_tutor.services.errors import MissingFieldsError, RecordNotFoundError, missing_fields

logger = logging.getLogger(__name__)


class FlashcardService:
    """Service for flashcard operations."""
    
    REQUIRED_FIELDS = ("question", "answer", "subject")
    
    def __init__(self, store: RecordStore):
        self.store = store
    
    async def _load(self, missing_ok: bool = False) -> list[dict]:
        if missing_ok:
            cards = await self.store.read_or(FLASHCARDS, [])
        else:
            cards = await self.store.read(FLASHCARDS)
        if not isinstance(cards, list):
            raise StoreReadError(FLASHCARDS, "expected a JSON array")
        return cards
    
    @staticmethod
    def _find(cards: list[dict], card_id: str) -> int:
        for index, card in enumerate(cards):
            if card.get("id") == card_id:
                return index
        raise RecordNotFoundError(FLASHCARDS, card_id)
    
    async def list_flashcards(self) -> list[dict]:
        """Return the whole collection."""
        return await self._load()
    
    async def create_flashcard(self, data: FlashcardCreate) -> dict:
        """
        Create a flashcard.
        
        Raises:
            MissingFieldsError: If question, answer or subject is missing
        """
        fields = data.to_document()
        missing = missing_fields(fields, self.REQUIRED_FIELDS)
        if missing:
            raise MissingFieldsError(missing)
        
        card = {
            "id": str(uuid.uuid4()),
            "question": data.question,
            "answer": data.answer,
            "subject": data.subject,
            "difficulty": (data.difficulty or FlashcardDifficulty.MEDIUM).value,
            "tags": data.tags or [],
            "created": utc_now_iso(),
            "timesReviewed": 0,
            "correctCount": 0,
            "lastReviewed": None,
        }
        
        async with self.store.lock(FLASHCARDS):
            cards = await self._load(missing_ok=True)
            cards.append(card)
            await self.store.write(FLASHCARDS, cards)
        
        logger.info("Created flashcard %s in subject %s", card["id"], card["subject"])
        return card
    
    async def update_flashcard(self, card_id: str, data: FlashcardUpdate) -> dict:
        """
        Merge the supplied fields over an existing flashcard.
        
        Fields left out of the request, or sent as null, are not changed.
        Blanking a required field raises MissingFieldsError.
        """
        changes = {
            key: value
            for key, value in data.to_document(exclude_unset=True).items()
            if value is not None
        }
        blank = missing_fields(changes, tuple(key for key in self.REQUIRED_FIELDS if key in changes))
        if blank:
            raise MissingFieldsError(blank)
        
        async with self.store.lock(FLASHCARDS):
            cards = await self._load(missing_ok=True)
            index = self._find(cards, card_id)
            cards[index] = {
                **cards[index],
                **changes,
                "updated": utc_now_iso(),
            }
            await self.store.write(FLASHCARDS, cards)
        
        logger.info("Updated flashcard %s (%s)", card_id, ", ".join(sorted(changes)) or "no fields")
        return cards[index]
    
    async def delete_flashcard(self, card_id: str) -> None:
        """Remove a flashcard. Nothing is written when the id is unknown."""
        async with self.store.lock(FLASHCARDS):
            cards = await self._load(missing_ok=True)
            remaining = [card for card in cards if card.get("id") != card_id]
            if len(remaining) == len(cards):
                raise RecordNotFoundError(FLASHCARDS, card_id)
            await self.store.write(FLASHCARDS, remaining)
        
        logger.info("Deleted flashcard %s", card_id)
    
    async def review_flashcard(self, card_id: str, review: FlashcardReview) -> dict:
        """Record one review: bump the counters and stamp lastReviewed."""
        async with self.store.lock(FLASHCARDS):
            cards = await self._load(missing_ok=True)
            index = self._find(cards, card_id)
            card = cards[index]
            card["timesReviewed"] = card.get("timesReviewed", 0) + 1
            if review.correct:
                card["correctCount"] = card.get("correctCount", 0) + 1
            card["lastReviewed"] = utc_now_iso()
            await self.store.write(FLASHCARDS, cards)
        
        return card
