"""
STEM Tutor - Client Models
Client-only records: courses, skill nodes and boss problems
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from stem_tutor.schemas.base import CamelModel

ModuleType = Literal["lesson", "flashcards", "practice", "game"]
CourseDifficulty = Literal["beginner", "intermediate", "advanced"]


class CourseModule(CamelModel):
    """One step of a course. ``content`` is rendered as-is and never inspected."""
    id: str
    title: str
    description: str = ""
    type: ModuleType = "lesson"
    completed: bool = False
    estimated_time: int = Field(default=0, ge=0)  # minutes
    content: Optional[Dict[str, Any]] = None


class Course(CamelModel):
    """A course owns its modules; deleting the course discards them."""
    id: str
    title: str
    description: str = ""
    subject: str = "math"
    difficulty: CourseDifficulty = "beginner"
    modules: List[CourseModule] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    created: datetime
    last_accessed: Optional[datetime] = None
    progress: int = Field(default=0, ge=0, le=100)
    is_shared: bool = False
    author: str = "You"
    total_time: int = Field(default=0, ge=0)  # minutes


class SkillNode(CamelModel):
    id: str
    name: str
    subject: str
    level: int = Field(default=1, ge=1)  # layout row only
    prerequisite_ids: List[str] = Field(default_factory=list)
    is_unlocked: bool = False
    is_completed: bool = False
    progress: int = Field(default=0, ge=0, le=100)
    xp_reward: int = Field(default=100, ge=0)
    description: str = ""


class BossPhase(CamelModel):
    id: str
    name: str
    description: str = ""
    completed: bool = False
    time_estimate: int = 0


class BossReward(CamelModel):
    type: Literal["badge", "avatar", "title", "cosmetic"]
    name: str
    description: str = ""
    rarity: Literal["rare", "epic", "legendary"]


class BossProblem(CamelModel):
    id: str
    name: str
    subject: str
    difficulty: Literal["apprentice", "expert", "master", "legendary"]
    description: str
    long_description: str = ""
    phases: List[BossPhase] = Field(default_factory=list)
    xp_reward: int = 0
    unlocked: bool = False
    completed: bool = False
    current_phase: int = 0
    total_time: int = 0
    rewards: List[BossReward] = Field(default_factory=list)
    prerequisite: Optional[str] = None
