from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Tuple

from .item import Item


@dataclass(frozen=True)
class PlayerStats:
    """Derived player stats. Recomputed from equipment whenever needed."""

    max_health: float
    attack: float
    defense: float
    speed: float
    remaining_health: float = 0.0

    def with_remaining(self, health: float) -> "PlayerStats":
        return replace(self, remaining_health=health)

    def truncated(self) -> "PlayerStats":
        """Whole-number copy for reporting."""
        return PlayerStats(
            max_health=int(self.max_health),
            attack=int(self.attack),
            defense=int(self.defense),
            speed=int(self.speed),
            remaining_health=int(self.remaining_health),
        )


@dataclass(frozen=True)
class CombatStats:
    enemies_defeated: int = 0
    total_damage_dealt: int = 0
    total_damage_taken: int = 0


@dataclass(frozen=True)
class DungeonResult:
    """Outcome of one dungeon run, handed to the caller for display and inventory."""

    success: bool
    casualties: bool
    duration: int
    loot: Tuple[Item, ...] = field(default_factory=tuple)
    combat_log: Tuple[str, ...] = field(default_factory=tuple)
    player_stats: PlayerStats = field(default_factory=lambda: PlayerStats(0, 0, 0, 0))
    stats: CombatStats = field(default_factory=CombatStats)


__all__ = ["PlayerStats", "CombatStats", "DungeonResult"]
