"""
STEM Tutor - Subjects API Router
"""
from typing import List

from fastapi import APIRouter, HTTPException, status

from stem_tutor.api.deps import Subjects
from stem_tutor.schemas.subject import SubjectCreate, SubjectResponse
from stem_tutor.services.errors import MissingFieldsError

router = APIRouter(prefix="/subjects", tags=["Subjects"])


@router.get("", response_model=List[SubjectResponse])
async def list_subjects(service: Subjects):
    """Get every subject with its current flashcard count."""
    return await service.list_subjects()


@router.post("", response_model=SubjectResponse, status_code=status.HTTP_201_CREATED)
async def create_subject(data: SubjectCreate, service: Subjects):
    """Create a subject. icon defaults to BookOpen, color to bg-blue-500."""
    try:
        return await service.create_subject(data)
    except MissingFieldsError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Subject name is required",
        )
