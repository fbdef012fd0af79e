from .dungeon import DungeonGenerator
from .items import ItemGenerator

__all__ = ["DungeonGenerator", "ItemGenerator"]
