"""Domain models: tiles, enemies, items, the player and run results."""
from .dungeon import Dungeon
from .enemy import Enemy, EnemyArchetype
from .inventory import Inventory
from .item import Item, ItemType, SlotType
from .player import Player
from .results import CombatStats, DungeonResult, PlayerStats
from .tile import Tile, TileType, classify_tile

__all__ = [
    "Dungeon",
    "Enemy",
    "EnemyArchetype",
    "Inventory",
    "Item",
    "ItemType",
    "SlotType",
    "Player",
    "CombatStats",
    "DungeonResult",
    "PlayerStats",
    "Tile",
    "TileType",
    "classify_tile",
]
