"""STEM Tutor - Services initialization."""
from stem_tutor.services.errors import (
    MissingFieldsError,
    RecordNotFoundError,
    ResourceError,
)
from stem_tutor.services.flashcards import FlashcardService
from stem_tutor.services.progress import ProgressService
from stem_tutor.services.subjects import SubjectService

__all__ = [
    "FlashcardService",
    "SubjectService",
    "ProgressService",
    "ResourceError",
    "MissingFieldsError",
    "RecordNotFoundError",
]
