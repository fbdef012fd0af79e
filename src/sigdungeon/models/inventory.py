from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from .item import Item

logger = logging.getLogger(__name__)


@dataclass
class Inventory:
    """Capacity-bounded, list-based item storage."""

    capacity: int = 20
    items: List[Item] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def __contains__(self, item: object) -> bool:
        return item in self.items

    @property
    def is_full(self) -> bool:
        return len(self.items) >= self.capacity

    def add(self, item: Item) -> bool:
        """Add an item; returns False (and keeps nothing) when at capacity."""
        if self.is_full:
            logger.debug("Inventory full (%d/%d); rejected %s", len(self.items), self.capacity, item.name)
            return False
        self.items.append(item)
        return True

    def extend(self, items: Iterable[Item]) -> List[Item]:
        """Add items in order; returns the ones that did not fit."""
        overflow: List[Item] = []
        for it in items:
            if not self.add(it):
                overflow.append(it)
        return overflow

    def remove(self, item: Item) -> bool:
        """Remove the given item. Returns True if removed, False if not found."""
        try:
            self.items.remove(item)
            return True
        except ValueError:
            return False

    def find(self, item_id: str) -> Optional[Item]:
        for it in self.items:
            if it.id == item_id:
                return it
        return None

    def take(self, item_id: str) -> Optional[Item]:
        """Remove and return the item with this id, if present."""
        it = self.find(item_id)
        if it is not None:
            self.items.remove(it)
        return it
