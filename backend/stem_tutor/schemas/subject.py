"""
STEM Tutor - Subject Schemas
Pydantic models for subject API requests and responses
"""
from typing import Optional

from pydantic import Field

from stem_tutor.schemas.base import CamelModel

DEFAULT_ICON = "BookOpen"
DEFAULT_COLOR = "bg-blue-500"


class SubjectCreate(CamelModel):
    """Request model for creating a subject. ``name`` is checked by the service."""
    name: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None


class SubjectResponse(CamelModel):
    """API response for a subject."""
    id: str
    name: str
    icon: str = DEFAULT_ICON
    color: str = DEFAULT_COLOR
    created: str
    flashcard_count: int = Field(default=0, ge=0)
