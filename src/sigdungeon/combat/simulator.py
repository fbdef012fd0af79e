from __future__ import annotations

import logging
from typing import List, Optional

from ..config import GameConfig
from ..core.rng import RandomSource
from ..generation.items import ItemGenerator
from ..models.dungeon import Dungeon
from ..models.item import Item
from ..models.player import Player
from ..models.results import CombatStats, DungeonResult
from .affinity import adjusted_stats
from .engine import CombatEngine
from .log import CombatLog

logger = logging.getLogger(__name__)


class CombatSimulator:
    """Resolves a whole run against the dungeon's enemy list, ignoring the grid.

    Enemies are fought in list order. The run fails the moment the player
    drops to 0 HP; an enemy that outlasts the round cap is left behind and the
    run continues. After each defeated enemy that is followed by another, the
    player heals ``player_recovery_percent`` of max health.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        item_generator: Optional[ItemGenerator] = None,
        engine: Optional[CombatEngine] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.item_generator = item_generator or ItemGenerator(self.config)
        self.engine = engine or CombatEngine(self.config.combat)

    def run(
        self,
        player: Player,
        dungeon: Dungeon,
        rng: RandomSource,
        selected_item: Optional[Item] = None,
    ) -> DungeonResult:
        combat_cfg = self.config.combat
        stats, _bonus = adjusted_stats(player, dungeon.signature, self.config, selected_item)
        health = stats.max_health
        log = CombatLog()
        enemies = list(dungeon.enemies)

        logger.info("Simulating %s with %d enemies", dungeon.name, len(enemies))
        log.add("start", f"Entered dungeon with {len(enemies)} enemies!")
        log.add(
            "stats",
            f"Player stats - HP: {int(stats.max_health)}, ATK: {int(stats.attack)}, "
            f"DEF: {int(stats.defense)}, SPD: {int(stats.speed)}",
        )

        success = True
        defeated = 0
        dealt = 0
        taken = 0
        for index, enemy in enumerate(enemies):
            outcome = self.engine.fight(enemy, health, stats, log, rng)
            health = outcome.player_health
            dealt += outcome.damage_dealt
            taken += outcome.damage_taken
            if outcome.enemy_defeated:
                defeated += 1
                dungeon.mark_defeated(enemy)
            if outcome.player_defeated:
                log.add("player_defeat", "PLAYER DEFEATED! Dungeon run failed!")
                success = False
                break
            if outcome.enemy_defeated and index < len(enemies) - 1:
                recovery = stats.max_health * combat_cfg.player_recovery_percent
                health = min(stats.max_health, health + recovery)
                log.add("recover", f"Recovered {int(recovery)} HP. Current HP: {int(health)}")

        if success:
            log.add("summary", f"DUNGEON CLEARED! Defeated {defeated}/{len(enemies)} enemies.")
            log.add("summary", f"Total damage dealt: {dealt}, Total damage taken: {taken}")

        casualties = success and health / stats.max_health < combat_cfg.low_health_threshold
        if casualties:
            log.add("summary", "Barely survived with heavy injuries!")

        loot = self._roll_loot(success, casualties, dungeon, rng, log)
        dungeon.collected_loot.extend(loot)

        logger.info("Simulation of %s finished: success=%s, defeated=%d/%d", dungeon.name, success, defeated, len(enemies))
        return DungeonResult(
            success=success,
            casualties=casualties,
            duration=dungeon.length,
            loot=tuple(loot),
            combat_log=log.lines(),
            player_stats=stats.with_remaining(max(0.0, health)).truncated(),
            stats=CombatStats(enemies_defeated=defeated, total_damage_dealt=dealt, total_damage_taken=taken),
        )

    def _roll_loot(
        self, success: bool, casualties: bool, dungeon: Dungeon, rng: RandomSource, log: CombatLog
    ) -> List[Item]:
        if not success:
            return []
        loot_cfg = self.config.loot
        count = rng.randint(loot_cfg.min_loot_count, loot_cfg.max_loot_count)
        if not casualties:
            count += loot_cfg.clean_run_bonus
        loot = [self.item_generator.generate_with_signature(dungeon.signature, rng) for _ in range(count)]
        log.add("loot", f"Found {count} items!", count=count)
        return loot


__all__ = ["CombatSimulator"]
