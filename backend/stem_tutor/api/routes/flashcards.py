"""
STEM Tutor - Flashcards API Router
CRUD and review endpoints for the flashcards collection
"""
from typing import List

from fastapi import APIRouter, HTTPException, status

from stem_tutor.api.deps import Flashcards
from stem_tutor.schemas.flashcard import (
    FlashcardCreate,
    FlashcardResponse,
    FlashcardReview,
    FlashcardUpdate,
)
from stem_tutor.services.errors import MissingFieldsError, RecordNotFoundError

router = APIRouter(prefix="/flashcards", tags=["Flashcards"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Flashcard not found",
    )


@router.get("", response_model=List[FlashcardResponse])
async def list_flashcards(service: Flashcards):
    """Get every flashcard. No paging or filtering."""
    return await service.list_flashcards()


@router.post(
    "",
    response_model=FlashcardResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a flashcard",
    description="question, answer and subject are required; difficulty defaults to medium.",
)
async def create_flashcard(data: FlashcardCreate, service: Flashcards):
    """Create a new flashcard."""
    try:
        return await service.create_flashcard(data)
    except MissingFieldsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.put("/{card_id}", response_model=FlashcardResponse)
async def update_flashcard(card_id: str, data: FlashcardUpdate, service: Flashcards):
    """
    Update a flashcard.
    
    Only the fields present in the body are changed; the rest keep their
    previous value. The id and review counters cannot be changed here.
    """
    try:
        return await service.update_flashcard(card_id, data)
    except RecordNotFoundError:
        raise _not_found()
    except MissingFieldsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.delete("/{card_id}")
async def delete_flashcard(card_id: str, service: Flashcards):
    """Delete a flashcard."""
    try:
        await service.delete_flashcard(card_id)
    except RecordNotFoundError:
        raise _not_found()
    return {"message": "Flashcard deleted successfully"}


@router.post("/{card_id}/review", response_model=FlashcardResponse)
async def review_flashcard(card_id: str, review: FlashcardReview, service: Flashcards):
    """
    Record a review of a flashcard.
    
    Always increments timesReviewed; increments correctCount only when
    ``correct`` is true.
    """
    try:
        return await service.review_flashcard(card_id, review)
    except RecordNotFoundError:
        raise _not_found()
