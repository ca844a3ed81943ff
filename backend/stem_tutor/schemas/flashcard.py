"""
STEM Tutor - Flashcard Schemas
Pydantic models for flashcard API requests and responses
"""
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from stem_tutor.schemas.base import CamelModel, unique


class FlashcardDifficulty(str, Enum):
    """Difficulty levels for flashcards."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class FlashcardFields(CamelModel):
    """Editable flashcard fields, all optional."""
    question: Optional[str] = None
    answer: Optional[str] = None
    subject: Optional[str] = None
    difficulty: Optional[FlashcardDifficulty] = None
    tags: Optional[List[str]] = None
    
    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, tags: Optional[List[str]]) -> Optional[List[str]]:
        return unique(tags)


class FlashcardCreate(FlashcardFields):
    """
    Request model for creating a flashcard.
    
    question, answer and subject are required, but are checked by the
    service so that a missing one is reported as a 400 naming the field.
    """
    pass


class FlashcardUpdate(FlashcardFields):
    """Partial update; omitted or null fields keep their stored value."""
    pass


class FlashcardReview(CamelModel):
    """Outcome of a single review."""
    correct: bool = False


class FlashcardResponse(CamelModel):
    """API response for a flashcard."""
    id: str
    question: str
    answer: str
    subject: str
    difficulty: FlashcardDifficulty = FlashcardDifficulty.MEDIUM
    tags: List[str] = Field(default_factory=list)
    created: str
    updated: Optional[str] = None
    times_reviewed: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)
    last_reviewed: Optional[str] = None
