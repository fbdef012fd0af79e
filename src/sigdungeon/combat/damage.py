from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import CombatConfig
from ..core.rng import RandomSource
from ..models.enemy import Enemy
from ..models.results import PlayerStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DamageBreakdown:
    """Details of a computed damage roll.

    Attributes:
        base: Damage before the variance roll, floored at 1.
        multiplier: The RNG multiplier applied to base damage.
        rolled: base * multiplier before rounding.
        final: The rounded damage applied.
    """

    base: float
    multiplier: float
    rolled: float
    final: int


class DamageCalculator:
    """The two per-hit damage formulas.

    Player hit:
      base = max(1, attack - enemy.damage * enemy_defense_factor)
      final = round(base * Uniform(1 - player_damage_variance, 1 + player_damage_variance))

    Enemy hit:
      base = max(1, enemy.damage - defense * player_defense_factor)
      final = round(base * Uniform(1 - enemy_damage_variance, 1 + enemy_damage_variance))

    Rounding is Python's round() (half to even). With variance below 0.5 and a
    base of at least 1 a hit never rounds down to 0.
    """

    def __init__(self, config: Optional[CombatConfig] = None) -> None:
        self.config = config or CombatConfig()

    @staticmethod
    def _roll(base: float, variance: float, rng: RandomSource) -> DamageBreakdown:
        multiplier = 1.0 if variance == 0.0 else rng.uniform(1.0 - variance, 1.0 + variance)
        rolled = base * multiplier
        return DamageBreakdown(base=base, multiplier=multiplier, rolled=rolled, final=int(round(rolled)))

    def player_hit(self, stats: PlayerStats, enemy: Enemy, rng: RandomSource) -> DamageBreakdown:
        base = max(1.0, stats.attack - enemy.damage * self.config.enemy_defense_factor)
        return self._roll(base, self.config.player_damage_variance, rng)

    def enemy_hit(self, enemy: Enemy, stats: PlayerStats, rng: RandomSource) -> DamageBreakdown:
        base = max(1.0, enemy.damage - stats.defense * self.config.player_defense_factor)
        return self._roll(base, self.config.enemy_damage_variance, rng)

    def player_damage(self, stats: PlayerStats, enemy: Enemy, rng: RandomSource) -> int:
        return self.player_hit(stats, enemy, rng).final

    def enemy_damage(self, enemy: Enemy, stats: PlayerStats, rng: RandomSource) -> int:
        return self.enemy_hit(enemy, stats, rng).final


__all__ = ["DamageBreakdown", "DamageCalculator"]
