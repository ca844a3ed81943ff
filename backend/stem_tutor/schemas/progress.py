"""
STEM Tutor - Progress Schemas
The installation-wide XP / level / streak record
"""
from typing import List, Optional

from pydantic import Field, field_validator

from stem_tutor.schemas.base import CamelModel, unique


class ProgressResponse(CamelModel):
    """The single progress record."""
    total_xp: int = Field(default=0, ge=0, alias="totalXP")
    level: int = Field(default=1, ge=1)
    streak: int = Field(default=0, ge=0)
    last_activity: Optional[str] = None
    completed_skills: List[str] = Field(default_factory=list)
    achievements: List[str] = Field(default_factory=list)


class ProgressUpdate(CamelModel):
    """
    Merge-update for progress.
    
    Only fields present in the request are applied. ``lastActivity`` may be
    set back to null; a null for any other field is ignored.
    """
    total_xp: Optional[int] = Field(default=None, ge=0, alias="totalXP")
    level: Optional[int] = Field(default=None, ge=1)
    streak: Optional[int] = Field(default=None, ge=0)
    last_activity: Optional[str] = None
    completed_skills: Optional[List[str]] = None
    achievements: Optional[List[str]] = None
    
    @field_validator("completed_skills", "achievements")
    @classmethod
    def dedupe_ids(cls, values: Optional[List[str]]) -> Optional[List[str]]:
        return unique(values)
    
    def changes(self) -> dict:
        """camelCase fields to merge over the stored record."""
        supplied = self.to_document(exclude_unset=True)
        return {
            key: value
            for key, value in supplied.items()
            if value is not None or key == "lastActivity"
        }
