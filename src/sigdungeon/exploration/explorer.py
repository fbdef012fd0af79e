from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..combat.affinity import adjusted_stats, format_bonus
from ..combat.engine import CombatEngine
from ..combat.log import CombatLog
from ..config import GameConfig
from ..core.rng import RandomSource
from ..generation.items import ItemGenerator
from ..models.dungeon import Dungeon
from ..models.enemy import Enemy
from ..models.item import Item
from ..models.player import Player
from ..models.results import CombatStats, DungeonResult

logger = logging.getLogger(__name__)

CARDINALS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class DungeonExplorer:
    """Autonomous walk through a dungeon grid.

    Each step: fight whatever undefeated enemy stands on the player's cell, then
    step towards the nearest living enemy (Manhattan distance) and recover
    ``exploration_recovery_percent`` of max health. The walk ends when every
    enemy is defeated, the player falls, or ``max_exploration_steps`` is spent.

    A fight that hits the round cap leaves the enemy standing with whatever
    health it has left; the player walks on and may meet it again later.
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

    def explore(
        self,
        dungeon: Dungeon,
        player: Player,
        rng: RandomSource,
        selected_item: Optional[Item] = None,
    ) -> DungeonResult:
        combat_cfg = self.config.combat
        log = CombatLog()

        dungeon.set_starting_position()
        stats, bonus = adjusted_stats(player, dungeon.signature, self.config, selected_item)
        health = stats.max_health

        logger.info("Exploring %s from %s with %d enemies", dungeon.name, dungeon.player_position, len(dungeon.enemies))
        log.add("affinity", f"Affinity bonus: {format_bonus(bonus)}", bonus=bonus)
        log.add("start", f"Entered dungeon with {len(dungeon.enemies)} enemies!")
        log.add(
            "stats",
            f"Player stats - HP: {int(stats.max_health)}, ATK: {int(stats.attack)}, "
            f"DEF: {int(stats.defense)}, SPD: {int(stats.speed)}",
        )

        running = True
        steps = 0
        dealt = 0
        taken = 0
        while running and steps < self.config.dungeon.max_exploration_steps:
            steps += 1

            enemy = dungeon.enemy_at(dungeon.player_x, dungeon.player_y)
            if enemy is not None:
                outcome = self.engine.fight(enemy, health, stats, log, rng)
                health = outcome.player_health
                dealt += outcome.damage_dealt
                taken += outcome.damage_taken
                if outcome.enemy_defeated:
                    running = not self._handle_defeat(dungeon, enemy, rng, log)
                elif outcome.player_defeated:
                    log.add("player_defeat", "PLAYER DEFEATED! Dungeon run failed!")
                    running = False

            if running:
                running = self._move(dungeon, rng, log)
                health = min(stats.max_health, health + stats.max_health * combat_cfg.exploration_recovery_percent)

        success = health > 0 and dungeon.all_enemies_defeated()
        defeated = len(dungeon.defeated)
        if success:
            log.add("summary", f"DUNGEON CLEARED! Defeated {defeated}/{len(dungeon.enemies)} enemies.")
            log.add("summary", f"Total damage dealt: {dealt}, Total damage taken: {taken}")
        elif health > 0:
            logger.info("Step budget of %d spent with %d enemies left", steps, len(dungeon.living_enemies()))

        casualties = success and health / stats.max_health < combat_cfg.low_health_threshold
        if casualties:
            log.add("summary", "Barely survived with heavy injuries!")

        loot: List[Item] = []
        if success:
            loot = list(dungeon.collected_loot)
            base = self.item_generator.generate_with_signature(dungeon.signature, rng)
            legendary = base.renamed(f"{self.config.loot.legendary_prefix} {base.name}")
            dungeon.collected_loot.append(legendary)
            loot.append(legendary)
            log.add("loot", f"Found a legendary treasure: {legendary.name}!", item=legendary.id)

        logger.info("Exploration of %s finished after %d steps: success=%s", dungeon.name, steps, success)
        return DungeonResult(
            success=success,
            casualties=casualties,
            duration=steps,
            loot=tuple(loot),
            combat_log=log.lines(),
            player_stats=stats.with_remaining(max(0.0, health)).truncated(),
            stats=CombatStats(enemies_defeated=defeated, total_damage_dealt=dealt, total_damage_taken=taken),
        )

    def _handle_defeat(self, dungeon: Dungeon, enemy: Enemy, rng: RandomSource, log: CombatLog) -> bool:
        """Record the defeat and roll its drop. Returns True when the dungeon is cleared."""
        dungeon.mark_defeated(enemy)
        drop = enemy.roll_loot(self.item_generator, rng, self.config.dungeon.enemy_loot_chance)
        if drop is not None:
            dungeon.collected_loot.append(drop)
            log.add("loot", f"Found {drop.name} from defeated {enemy.name}!", item=drop.id)
        else:
            log.add("loot", f"No loot found from defeated {enemy.name}.")
        if dungeon.all_enemies_defeated():
            log.add("summary", "All enemies defeated! Dungeon cleared!")
            return True
        return False

    def _move(self, dungeon: Dungeon, rng: RandomSource, log: CombatLog) -> bool:
        """Take one step towards the nearest living enemy. Returns False once none are left."""
        living = dungeon.living_enemies()
        if not living:
            return False
        px, py = dungeon.player_position
        target = min(living, key=lambda e: abs(e.x - px) + abs(e.y - py))
        dx, dy = _sign(target.x - px), _sign(target.y - py)

        moved = False
        if dx != 0:
            moved = dungeon.move_player(dx, 0)
        if not moved and dy != 0:
            moved = dungeon.move_player(0, dy)
        if not moved:
            directions = list(CARDINALS)
            rng.shuffle(directions)
            for ddx, ddy in directions:
                if dungeon.move_player(ddx, ddy):
                    moved = True
                    break

        if moved:
            tile = dungeon.tile_at(dungeon.player_x, dungeon.player_y)
            log.add(
                "move",
                f"Moved to {tile.type.name.capitalize()} tile at ({dungeon.player_x}, {dungeon.player_y})",
            )
        else:
            log.add("stuck", "Player is stuck! Cannot move to any adjacent tile.")
        return True


__all__ = ["DungeonExplorer"]
