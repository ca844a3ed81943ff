"""
STEM Tutor - Subject Service
Subjects group flashcards; their card counts are derived when listed
"""
import logging
import uuid
from collections import Counter

from stem_tutor.core.clock import utc_now_iso
from stem_tutor.core.store import FLASHCARDS, SUBJECTS, RecordStore, StoreReadError
from stem_tutor.schemas.subject import DEFAULT_COLOR, DEFAULT_ICON, SubjectCreate
from stem_tutor.services.errors import MissingFieldsError, missing_fields

logger = logging.getLogger(__name__)


class SubjectService:
    """Service for subject operations."""
    
    REQUIRED_FIELDS = ("name",)
    
    def __init__(self, store: RecordStore):
        self.store = store
    
    async def list_subjects(self) -> list[dict]:
        """
        Return every subject with ``flashcardCount`` computed from the
        flashcards collection (cards whose ``subject`` is the subject id).
        """
        subjects = await self.store.read(SUBJECTS)
        if not isinstance(subjects, list):
            raise StoreReadError(SUBJECTS, "expected a JSON array")
        
        cards = await self.store.read_or(FLASHCARDS, [])
        if not isinstance(cards, list):
            raise StoreReadError(FLASHCARDS, "expected a JSON array")
        counts = Counter(card.get("subject") for card in cards)
        
        return [
            {**subject, "flashcardCount": counts.get(subject.get("id"), 0)}
            for subject in subjects
        ]
    
    async def create_subject(self, data: SubjectCreate) -> dict:
        """
        Create a subject.
        
        Raises:
            MissingFieldsError: If name is missing or blank
        """
        missing = missing_fields(data.to_document(), self.REQUIRED_FIELDS)
        if missing:
            raise MissingFieldsError(missing)
        
        subject = {
            "id": str(uuid.uuid4()),
            "name": data.name,
            "icon": data.icon or DEFAULT_ICON,
            "color": data.color or DEFAULT_COLOR,
            "created": utc_now_iso(),
            "flashcardCount": 0,
        }
        
        async with self.store.lock(SUBJECTS):
            subjects = await self.store.read_or(SUBJECTS, [])
            if not isinstance(subjects, list):
                raise StoreReadError(SUBJECTS, "expected a JSON array")
            subjects.append(subject)
            await self.store.write(SUBJECTS, subjects)
        
        logger.info("Created subject %s (%s)", subject["id"], subject["name"])
        return subject
