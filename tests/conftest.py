import sys
from pathlib import Path
from typing import Iterable, Optional

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from sigdungeon.config import GameConfig  # noqa: E402
from sigdungeon.core.rng import RandomSource  # noqa: E402
from sigdungeon.models.dungeon import Dungeon  # noqa: E402
from sigdungeon.models.enemy import Enemy  # noqa: E402
from sigdungeon.models.item import Item, ItemType  # noqa: E402
from sigdungeon.models.player import Player  # noqa: E402
from sigdungeon.models.tile import Tile, TileType  # noqa: E402
from sigdungeon.signature import Signature  # noqa: E402


@pytest.fixture
def rng() -> RandomSource:
    return RandomSource(1234)


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def neutral_player() -> Player:
    """100/10/5/10 player wearing one power-0 ring with an all-zero signature."""
    player = Player()
    player.equip(Item(name="Plain Ring", type=ItemType.RING, power=0, signature=Signature.zero()))
    return player


def make_enemy(
    health: float = 20,
    damage: float = 5,
    x: int = 0,
    y: int = 0,
    name: str = "Goblin",
    signature: Optional[Signature] = None,
) -> Enemy:
    return Enemy(
        name=name,
        type="Goblin",
        health=health,
        damage=damage,
        signature=signature or Signature.zero(),
        x=x,
        y=y,
    )


def build_dungeon(
    enemies: Iterable[Enemy] = (),
    width: int = 5,
    height: int = 5,
    signature: Optional[Signature] = None,
    lava: Iterable[tuple] = (),
) -> Dungeon:
    """All-Stone grid; cells listed in ``lava`` are impassable Lava."""
    sig = signature or Signature.zero()
    blocked = set(lava)
    tiles = []
    for y in range(height):
        row = []
        for x in range(width):
            kind = TileType.LAVA if (x, y) in blocked else TileType.STONE
            row.append(Tile(type=kind, signature=sig, x=x, y=y, passable=kind.is_passable))
        tiles.append(row)
    return Dungeon(signature=sig, tiles=tiles, enemies=list(enemies))


@pytest.fixture
def make_dungeon():
    return build_dungeon


@pytest.fixture(name="make_enemy")
def make_enemy_fixture():
    return make_enemy
