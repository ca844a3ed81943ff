"""STEM Tutor - Schemas initialization."""
from stem_tutor.schemas.flashcard import (
    FlashcardCreate,
    FlashcardDifficulty,
    FlashcardResponse,
    FlashcardReview,
    FlashcardUpdate,
)
from stem_tutor.schemas.progress import ProgressResponse, ProgressUpdate
from stem_tutor.schemas.subject import SubjectCreate, SubjectResponse

__all__ = [
    # Flashcards
    "FlashcardCreate",
    "FlashcardDifficulty",
    "FlashcardResponse",
    "FlashcardReview",
    "FlashcardUpdate",
    # Subjects
    "SubjectCreate",
    "SubjectResponse",
    # Progress
    "ProgressResponse",
    "ProgressUpdate",
]
