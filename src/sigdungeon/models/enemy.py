from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from ..signature import Signature

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..core.rng import RandomSource
    from ..generation.items import ItemGenerator
    from .item import Item


class EnemyArchetype(Enum):
    GOBLIN = "Goblin"
    SKELETON = "Skeleton"
    SLIME = "Slime"
    TROLL = "Troll"
    GHOST = "Ghost"

    @property
    def base_health(self) -> float:
        return _ARCHETYPE_STATS[self][0]

    @property
    def base_damage(self) -> float:
        return _ARCHETYPE_STATS[self][1]


# (base health, base damage)
_ARCHETYPE_STATS: Dict[EnemyArchetype, Tuple[float, float]] = {
    EnemyArchetype.GOBLIN: (20.0, 5.0),
    EnemyArchetype.SKELETON: (15.0, 7.0),
    EnemyArchetype.SLIME: (30.0, 3.0),
    EnemyArchetype.TROLL: (50.0, 8.0),
    EnemyArchetype.GHOST: (25.0, 6.0),
}


@dataclass(eq=False)
class Enemy:
    """A placed enemy. Identity-hashed so a dungeon can track defeats in a set.

    ``health`` is the only field that changes after generation, and only
    while a fight is being resolved.
    """

    name: str
    type: str
    health: float
    damage: float
    signature: Signature
    x: int = 0
    y: int = 0

    @property
    def alive(self) -> bool:
        return self.health > 0

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def roll_loot(self, generator: "ItemGenerator", rng: "RandomSource", chance: float = 0.5) -> Optional["Item"]:
        """Drop an item themed on this enemy's signature with the given probability."""
        if not rng.chance(chance):
            return None
        return generator.generate_with_signature(self.signature, rng)


__all__ = ["EnemyArchetype", "Enemy"]
