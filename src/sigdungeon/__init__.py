"""
Signature dungeon core package.

Every item, tile, enemy and dungeon carries a magical Signature. This package
provides headless domain logic built around it:
- Signature math and the dimension/descriptor catalog
- Item and dungeon generation seeded by a signature
- Round-based combat shared by a list simulator and a grid explorer
- GameSession orchestrating inventory, dungeon slots and runs

Rendering layers should import and compose these services.
"""
from .config import GameConfig
from .core.rng import RandomSource
from .signature import Signature
from .models import Dungeon, DungeonResult, Enemy, Inventory, Item, Player, PlayerStats
from .generation import DungeonGenerator, ItemGenerator
from .combat import CombatEngine, CombatSimulator
from .exploration import DungeonExplorer
from .session import GameSession
from .errors import (
    SigDungeonError,
    SignatureError,
    SignatureIndexError,
    ConfigError,
    InventoryFullError,
    SlotLockedError,
    EmptySlotError,
    NoActiveRunError,
    RunInProgressError,
)

__all__ = [
    "GameConfig",
    "RandomSource",
    "Signature",
    "Dungeon",
    "DungeonResult",
    "Enemy",
    "Inventory",
    "Item",
    "Player",
    "PlayerStats",
    "DungeonGenerator",
    "ItemGenerator",
    "CombatEngine",
    "CombatSimulator",
    "DungeonExplorer",
    "GameSession",
    "SigDungeonError",
    "SignatureError",
    "SignatureIndexError",
    "ConfigError",
    "InventoryFullError",
    "SlotLockedError",
    "EmptySlotError",
    "NoActiveRunError",
    "RunInProgressError",
]

__version__ = "0.1.0"
