from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Tuple

from ..catalog import describe, first_descriptor
from ..config import GameConfig
from ..core.rng import RandomSource
from ..models.dungeon import Dungeon
from ..models.enemy import Enemy, EnemyArchetype
from ..models.tile import Tile, TileType
from ..signature import Signature, clamp

logger = logging.getLogger(__name__)

ARCHETYPES: List[EnemyArchetype] = list(EnemyArchetype)


class DungeonGenerator:
    """Signature-driven dungeon generator.

    Algorithm:
    - Derive the dungeon signature from the seed signature, then roll difficulty and length.
    - Fill a width x height field with uniform noise and apply one 3x3 box blur
      (the window is clamped at the edges, it does not wrap).
    - Offset every component of the dungeon signature by noise * tile_noise_scale
      to get each tile's signature, and classify the tile from it.
    - Carve a top-to-bottom Stone path starting at width // 2 that drifts one
      column at a time but never touches the outer columns.
    - Place 3 + 2 * difficulty enemies on shuffled passable cells.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()

    def generate(self, seed_signature: Signature, rng: RandomSource) -> Dungeon:
        cfg = self.config.dungeon
        signature = Signature.create_similar(seed_signature, cfg.signature_variance, rng)
        difficulty = rng.randint(cfg.min_difficulty, cfg.max_difficulty)
        length = rng.randint(cfg.min_length, cfg.max_length)

        tiles = self._build_tiles(signature, cfg.width, cfg.height, rng)
        dungeon = Dungeon(
            signature=signature,
            tiles=tiles,
            difficulty=difficulty,
            length=length,
            name=self.dungeon_name(signature),
        )
        path = self._carve_path(dungeon, rng)
        self._populate_enemies(dungeon, rng)

        logger.info(
            "Generated %s: %dx%d, difficulty=%d, enemies=%d",
            dungeon.name,
            dungeon.width,
            dungeon.height,
            difficulty,
            len(dungeon.enemies),
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Path columns: %s", [x for x, _ in path])
            for line in dungeon.to_str_lines(show_player=False):
                logger.debug("%s", line)
        return dungeon

    def dungeon_name(self, signature: Signature) -> str:
        sig_cfg = self.config.signature
        words = describe(signature, sig_cfg.high_threshold, sig_cfg.low_threshold)
        return " ".join(words[:2] + ["Dungeon"])

    # ---- Tile map ------------------------------------------------------------
    def _noise_field(self, width: int, height: int, rng: RandomSource) -> List[List[float]]:
        raw = [[rng.uniform(-1.0, 1.0) for _ in range(width)] for _ in range(height)]
        smoothed = [[0.0] * width for _ in range(height)]
        for y in range(height):
            for x in range(width):
                total = 0.0
                count = 0
                for ny in range(max(0, y - 1), min(height - 1, y + 1) + 1):
                    for nx in range(max(0, x - 1), min(width - 1, x + 1) + 1):
                        total += raw[ny][nx]
                        count += 1
                smoothed[y][x] = total / count
        return smoothed

    def _build_tiles(self, signature: Signature, width: int, height: int, rng: RandomSource) -> List[List[Tile]]:
        noise = self._noise_field(width, height, rng)
        scale = self.config.dungeon.tile_noise_scale
        tiles: List[List[Tile]] = []
        for y in range(height):
            row: List[Tile] = []
            for x in range(width):
                offset = noise[y][x] * scale
                tile_sig = Signature(tuple(clamp(v + offset) for v in signature))
                row.append(Tile.from_signature(tile_sig, x, y))
            tiles.append(row)
        return tiles

    def _carve_path(self, dungeon: Dungeon, rng: RandomSource) -> List[Tuple[int, int]]:
        """Guarantee a walkable top-to-bottom route by repainting cells as Stone."""
        width, height = dungeon.width, dungeon.height
        drift = self.config.dungeon.path_drift_chance
        x = width // 2
        path: List[Tuple[int, int]] = []
        for y in range(height):
            tile = dungeon.tile_at(x, y)
            dungeon.set_tile(replace(tile, type=TileType.STONE, passable=True))
            path.append((x, y))
            if y < height - 1 and rng.chance(drift):
                x = max(1, min(width - 2, x + rng.randint(-1, 1)))
        return path

    # ---- Enemies ---------------------------------------------------------------
    def _populate_enemies(self, dungeon: Dungeon, rng: RandomSource) -> None:
        cfg = self.config.dungeon
        count = cfg.base_enemy_count + dungeon.difficulty * cfg.enemies_per_difficulty
        open_cells = dungeon.passable_positions()
        rng.shuffle(open_cells)
        dungeon.enemies = []
        for x, y in open_cells[:count]:
            dungeon.enemies.append(self.enemy_for_tile(dungeon.tile_at(x, y), dungeon.signature, rng))
        if len(dungeon.enemies) < count:
            logger.warning("Only %d passable cells for %d enemies", len(open_cells), count)

    def enemy_for_tile(self, tile: Tile, dungeon_signature: Signature, rng: RandomSource) -> Enemy:
        archetype = rng.choice(ARCHETYPES)
        signature = Signature.create_similar(tile.signature, self.config.dungeon.enemy_signature_variance, rng)
        sig_cfg = self.config.signature
        dungeon_cfg = self.config.dungeon
        adjective = first_descriptor(signature, sig_cfg.high_threshold, sig_cfg.low_threshold)
        name = f"{adjective} {archetype.value}" if adjective else archetype.value
        # Stronger when themed like the dungeon, weaker when not.
        closeness = 1 - signature.distance(dungeon_signature) / dungeon_cfg.enemy_scale_distance
        scale = dungeon_cfg.enemy_min_scale + dungeon_cfg.enemy_scale_range * closeness
        return Enemy(
            name=name,
            type=archetype.value,
            health=archetype.base_health * scale,
            damage=archetype.base_damage * scale,
            signature=signature,
            x=tile.x,
            y=tile.y,
        )


__all__ = ["DungeonGenerator", "ARCHETYPES"]
