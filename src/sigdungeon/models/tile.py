from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Tuple

from ..signature import Signature


class TileType(Enum):
    """Terrain classes derived from a tile's signature.

    Only LAVA blocks movement; the forced traversal path repaints cells as
    passable STONE, so STONE must stay walkable for that guarantee to hold.
    """

    STONE = "stone"
    WATER = "water"
    LAVA = "lava"
    ICE = "ice"
    GRASS = "grass"
    SAND = "sand"
    CRYSTAL = "crystal"
    WOOD = "wood"

    @property
    def is_passable(self) -> bool:
        return self is not TileType.LAVA

    @property
    def glyph(self) -> str:
        """A single-character visualization useful for logs/debug."""
        return _GLYPHS[self]


_GLYPHS = {
    TileType.STONE: ".",
    TileType.WATER: "~",
    TileType.LAVA: "^",
    TileType.ICE: "*",
    TileType.GRASS: '"',
    TileType.SAND: ":",
    TileType.CRYSTAL: "%",
    TileType.WOOD: "T",
}

# First match wins; anything unmatched is STONE.
TILE_RULES: List[Tuple[Callable[[Signature], bool], TileType]] = [
    (lambda s: s.temperature > 0.5 and s.wetness < -0.3, TileType.LAVA),
    (lambda s: s.temperature < -0.5 and s.wetness > 0.3, TileType.ICE),
    (lambda s: s.wetness > 0.5, TileType.WATER),
    (lambda s: s.temperature > 0 and s.wetness > 0, TileType.GRASS),
    (lambda s: s.temperature > 0.3 and s.wetness < 0, TileType.SAND),
    (lambda s: s.resonance > 0.5, TileType.CRYSTAL),
    (lambda s: s.resonance < -0.5, TileType.WOOD),
]


def classify_tile(signature: Signature) -> TileType:
    for rule, tile_type in TILE_RULES:
        if rule(signature):
            return tile_type
    return TileType.STONE


@dataclass(frozen=True)
class Tile:
    """One grid cell. Coordinates are (x, y) with (0,0) at top-left."""

    type: TileType
    signature: Signature
    x: int
    y: int
    passable: bool

    @classmethod
    def from_signature(cls, signature: Signature, x: int, y: int) -> "Tile":
        tile_type = classify_tile(signature)
        return cls(type=tile_type, signature=signature, x=x, y=y, passable=tile_type.is_passable)


__all__ = ["TileType", "Tile", "TILE_RULES", "classify_tile"]
