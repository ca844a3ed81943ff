"""
STEM Tutor - Boss Arena
Multi-phase challenge problems from a bundled fixture. Progress is kept in
memory for the session only.
"""
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter

from stem_tutor.client.cache import bundled_seed
from stem_tutor.client.models import BossProblem

logger = logging.getLogger(__name__)

_BOSSES = TypeAdapter(List[BossProblem])


def load_bosses(path: Optional[Path] = None) -> List[BossProblem]:
    path = path or bundled_seed("boss-problems.json")
    return _BOSSES.validate_json(path.read_text(encoding="utf-8"))


def progress_percent(boss: BossProblem) -> float:
    if not boss.phases:
        return 0.0
    done = sum(1 for phase in boss.phases if phase.completed)
    return done * 100 / len(boss.phases)


class BossArena:

    def __init__(self, bosses: Optional[List[BossProblem]] = None):
        self.bosses = bosses if bosses is not None else load_bosses()
        self.selected: Optional[BossProblem] = None

    def get(self, boss_id: str) -> BossProblem:
        for boss in self.bosses:
            if boss.id == boss_id:
                return boss
        raise KeyError(boss_id)

    def start(self, boss_id: str) -> Optional[BossProblem]:
        """Open a boss for play. Locked bosses cannot be started."""
        boss = self.get(boss_id)
        if not boss.unlocked:
            return None
        self.selected = boss
        return boss

    def close(self) -> None:
        self.selected = None

    def complete_phase(self, boss_id: str, phase_id: str) -> BossProblem:
        """Mark a phase done and move ``currentPhase`` to the first unfinished one."""
        boss = self.get(boss_id)
        if not boss.unlocked:
            raise ValueError(f"Boss {boss_id} is locked")
        phase = next((p for p in boss.phases if p.id == phase_id), None)
        if phase is None:
            raise KeyError(phase_id)

        phase.completed = True
        remaining = [i for i, p in enumerate(boss.phases) if not p.completed]
        boss.current_phase = remaining[0] if remaining else len(boss.phases)
        if not remaining and not boss.completed:
            boss.completed = True
            logger.info("Boss %s defeated (+%d XP)", boss.name, boss.xp_reward)
        return boss
