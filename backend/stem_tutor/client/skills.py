"""
STEM Tutor - Skill Tree
Client-only skill nodes grouped by level. Prerequisites are shown but not
enforced: any node can be unlocked directly.
"""
import logging
import uuid
from collections import defaultdict
from enum import Enum
from typing import Dict, List, Optional, Sequence

from stem_tutor.client.cache import SKILL_NODES_KEY, CollectionCache, bundled_seed
from stem_tutor.client.models import SkillNode
from stem_tutor.client.storage import LocalStorage
from stem_tutor.core.config import settings

logger = logging.getLogger(__name__)


class SkillStatus(str, Enum):
    COMPLETED = "completed"
    AVAILABLE = "available"
    LOCKED = "locked"


def status(node: SkillNode) -> SkillStatus:
    if node.is_completed:
        return SkillStatus.COMPLETED
    if node.is_unlocked:
        return SkillStatus.AVAILABLE
    return SkillStatus.LOCKED


class SkillTree:
    """Skill nodes plus the grouping the tree view lays out."""

    def __init__(self, cache: CollectionCache[SkillNode]):
        self.cache = cache
        self.nodes: List[SkillNode] = []

    @classmethod
    def from_storage(cls, storage: LocalStorage, seed: str | None = None) -> "SkillTree":
        source = seed or settings.SAMPLE_SKILLS_SOURCE or bundled_seed("sample-skill-nodes.json")
        return cls(CollectionCache(storage, SKILL_NODES_KEY, SkillNode, seed=source))

    async def load(self) -> List[SkillNode]:
        self.nodes = await self.cache.load()
        return self.nodes

    def _save(self) -> None:
        self.cache.save(self.nodes)

    def get(self, node_id: str) -> SkillNode:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)

    def add_skill(
        self,
        name: str,
        subject: str,
        level: int = 1,
        description: str = "",
        xp_reward: int = 100,
        prerequisite_ids: Sequence[str] = (),
        is_unlocked: Optional[bool] = None,
    ) -> SkillNode:
        """Add a node. Unless told otherwise it starts unlocked only if it has no prerequisites."""
        if is_unlocked is None:
            is_unlocked = not prerequisite_ids
        node = SkillNode(
            id=uuid.uuid4().hex,
            name=name,
            subject=subject,
            level=level,
            description=description,
            xp_reward=xp_reward,
            prerequisite_ids=list(dict.fromkeys(prerequisite_ids)),
            is_unlocked=is_unlocked,
        )
        self.nodes.append(node)
        self._save()
        return node

    def unlock_skill(self, node_id: str) -> SkillNode:
        node = self.get(node_id)
        node.is_unlocked = True
        self._save()
        return node

    def set_progress(self, node_id: str, progress: int) -> SkillNode:
        node = self.get(node_id)
        node.progress = max(0, min(100, progress))
        self._save()
        return node

    def complete_skill(self, node_id: str) -> SkillNode:
        node = self.get(node_id)
        node.is_unlocked = True
        node.is_completed = True
        node.progress = 100
        self._save()
        logger.info("Completed skill %s (+%d XP)", node.name, node.xp_reward)
        return node

    def status(self, node_id: str) -> SkillStatus:
        return status(self.get(node_id))

    def nodes_by_level(self) -> Dict[int, List[SkillNode]]:
        grouped: Dict[int, List[SkillNode]] = defaultdict(list)
        for node in self.nodes:
            grouped[node.level].append(node)
        return dict(sorted(grouped.items()))

    def max_level(self) -> int:
        return max((node.level for node in self.nodes), default=0)

    def completed_ids(self) -> List[str]:
        return [node.id for node in self.nodes if node.is_completed]
