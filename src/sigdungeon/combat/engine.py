from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import CombatConfig
from ..core.rng import RandomSource
from ..models.enemy import Enemy
from ..models.results import PlayerStats
from .damage import DamageCalculator
from .log import CombatLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FightOutcome:
    """Result of one player-vs-enemy fight."""

    enemy_defeated: bool
    timed_out: bool
    damage_dealt: int
    damage_taken: int
    rounds: int
    player_health: float

    @property
    def player_defeated(self) -> bool:
        return self.player_health <= 0


class CombatEngine:
    """Round-based fight resolution shared by the simulator and the explorer.

    Each round the side with initiative strikes first; the player has it when
    ``speed >= enemy.damage * player_speed_advantage_factor``. The other side
    answers if still standing, and a player who went second gets their swing
    afterwards. A fight stops as soon as either side reaches 0 HP or after
    ``max_combat_rounds`` rounds.

    The enemy's ``health`` is reduced in place. The player's health is passed
    in and handed back in the FightOutcome.
    """

    def __init__(self, config: Optional[CombatConfig] = None, damage_calculator: Optional[DamageCalculator] = None) -> None:
        self.config = config or CombatConfig()
        self.damage_calculator = damage_calculator or DamageCalculator(self.config)

    def player_has_initiative(self, stats: PlayerStats, enemy: Enemy) -> bool:
        return stats.speed >= enemy.damage * self.config.player_speed_advantage_factor

    def fight(
        self,
        enemy: Enemy,
        player_health: float,
        stats: PlayerStats,
        log: CombatLog,
        rng: RandomSource,
    ) -> FightOutcome:
        log.add(
            "encounter",
            f"Encountered {enemy.name}! (HP: {int(enemy.health)}, DMG: {int(enemy.damage)})",
            enemy=enemy.name,
        )
        health = player_health
        dealt = 0
        taken = 0
        rounds = 0
        player_first = self.player_has_initiative(stats, enemy)

        while enemy.health > 0 and health > 0 and rounds < self.config.max_combat_rounds:
            rounds += 1
            if player_first:
                dealt += self._player_attacks(enemy, stats, log, rng)
                if enemy.health <= 0:
                    break
            hit = self.damage_calculator.enemy_damage(enemy, stats, rng)
            health -= hit
            taken += hit
            log.add(
                "attack",
                f"- {enemy.name} attacks for {hit} damage! Player has {max(0, int(health))} HP left.",
                attacker=enemy.name,
                damage=hit,
            )
            if health <= 0:
                break
            if not player_first:
                dealt += self._player_attacks(enemy, stats, log, rng)

        defeated = enemy.health <= 0
        timed_out = not defeated and health > 0
        if timed_out:
            log.add("timeout", "- Combat taking too long, moving on...", enemy=enemy.name, rounds=rounds)
        if defeated:
            log.add("defeat", f"- {enemy.name} was defeated!", enemy=enemy.name)

        return FightOutcome(
            enemy_defeated=defeated,
            timed_out=timed_out,
            damage_dealt=dealt,
            damage_taken=taken,
            rounds=rounds,
            player_health=health,
        )

    def _player_attacks(self, enemy: Enemy, stats: PlayerStats, log: CombatLog, rng: RandomSource) -> int:
        hit = self.damage_calculator.player_damage(stats, enemy, rng)
        enemy.health -= hit
        log.add(
            "attack",
            f"- Player attacks for {hit} damage! {enemy.name} has {max(0, int(enemy.health))} HP left.",
            attacker="Player",
            damage=hit,
        )
        return hit


__all__ = ["CombatEngine", "FightOutcome"]
