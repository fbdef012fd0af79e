from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from ..signature import Signature
from .enemy import Enemy
from .item import Item
from .tile import Tile

logger = logging.getLogger(__name__)


@dataclass
class Dungeon:
    """
    A generated dungeon: the tile grid, the enemies placed on it and the
    state of the run exploring it (player position, defeats, loot).

    ``tiles`` is indexed ``tiles[y][x]``. A Dungeon belongs to exactly one run
    and is discarded once its DungeonResult has been produced.
    """

    signature: Signature
    tiles: List[List[Tile]]
    enemies: List[Enemy] = field(default_factory=list)
    difficulty: int = 1
    length: int = 3
    name: str = "Dungeon"
    player_x: int = 0
    player_y: int = 0
    defeated: Set[Enemy] = field(default_factory=set)
    collected_loot: List[Item] = field(default_factory=list)

    @property
    def width(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    @property
    def height(self) -> int:
        return len(self.tiles)

    @property
    def player_position(self) -> Tuple[int, int]:
        return self.player_x, self.player_y

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile out of bounds: ({x},{y}) not in [0,{self.width})x[0,{self.height})")
        return self.tiles[y][x]

    def set_tile(self, tile: Tile) -> None:
        if not self.in_bounds(tile.x, tile.y):
            raise IndexError(f"Tile out of bounds: ({tile.x},{tile.y})")
        self.tiles[tile.y][tile.x] = tile

    def is_passable(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return self.tiles[y][x].passable

    def passable_positions(self) -> List[Tuple[int, int]]:
        return [(t.x, t.y) for row in self.tiles for t in row if t.passable]

    # ---- Enemies -----------------------------------------------------------
    def living_enemies(self) -> List[Enemy]:
        return [e for e in self.enemies if e not in self.defeated]

    def enemy_at(self, x: int, y: int) -> Optional[Enemy]:
        """The undefeated enemy standing on (x, y), if any."""
        for e in self.enemies:
            if e.x == x and e.y == y and e not in self.defeated:
                return e
        return None

    def mark_defeated(self, enemy: Enemy) -> None:
        self.defeated.add(enemy)

    def all_enemies_defeated(self) -> bool:
        return all(e in self.defeated for e in self.enemies)

    # ---- Player movement ---------------------------------------------------
    def move_player(self, dx: int, dy: int) -> bool:
        nx, ny = self.player_x + dx, self.player_y + dy
        if not self.is_passable(nx, ny):
            return False
        self.player_x, self.player_y = nx, ny
        return True

    def set_starting_position(self) -> Tuple[int, int]:
        """Put the player on the first passable, enemy-free cell in row-major order.

        Falls back to the top-center cell when no such cell exists.
        """
        for y in range(self.height):
            for x in range(self.width):
                if self.tiles[y][x].passable and self.enemy_at(x, y) is None:
                    self.player_x, self.player_y = x, y
                    return x, y
        self.player_x, self.player_y = self.width // 2, 0
        logger.warning("No free passable start cell; falling back to (%d,%d)", self.player_x, self.player_y)
        return self.player_x, self.player_y

    # ---- Export / Compare -----------------------------------------------
    def to_str_lines(self, show_player: bool = True) -> List[str]:
        occupied = {e.position for e in self.living_enemies()}
        lines: List[str] = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if show_player and (x, y) == self.player_position:
                    row.append("@")
                elif (x, y) in occupied:
                    row.append("E")
                else:
                    row.append(self.tiles[y][x].type.glyph)
            lines.append("".join(row))
        return lines

    def snapshot(self) -> Tuple[Tuple[str, ...], ...]:
        """
        Deterministic, hashable snapshot of the tile types for equality tests.
        """
        return tuple(tuple(t.type.value for t in row) for row in self.tiles)

    def __str__(self) -> str:
        return "\n".join(self.to_str_lines())


__all__ = ["Dungeon"]
