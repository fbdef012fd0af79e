from .explorer import DungeonExplorer

__all__ = ["DungeonExplorer"]
