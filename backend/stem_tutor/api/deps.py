"""
STEM Tutor - API Dependencies
FastAPI dependencies wiring the record store into the resource services
"""
from typing import Annotated

from fastapi import Depends

from stem_tutor.core.store import RecordStore, get_store
from stem_tutor.services import FlashcardService, ProgressService, SubjectService


def get_flashcard_service(store: Annotated[RecordStore, Depends(get_store)]) -> FlashcardService:
    return FlashcardService(store)


def get_subject_service(store: Annotated[RecordStore, Depends(get_store)]) -> SubjectService:
    return SubjectService(store)


def get_progress_service(store: Annotated[RecordStore, Depends(get_store)]) -> ProgressService:
    return ProgressService(store)


# Type aliases for common dependencies
Flashcards = Annotated[FlashcardService, Depends(get_flashcard_service)]
Subjects = Annotated[SubjectService, Depends(get_subject_service)]
Progress = Annotated[ProgressService, Depends(get_progress_service)]
