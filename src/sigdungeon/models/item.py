from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple

from ..signature import Signature


class SlotType(str, Enum):
    WEAPON = "weapon"
    SHIELD = "shield"
    HELMET = "helmet"
    ARMOR = "armor"
    AMULET = "amulet"
    RING = "ring"
    BOOTS = "boots"


class ItemType(Enum):
    SWORD = "Sword"
    SHIELD = "Shield"
    HELMET = "Helmet"
    ARMOR = "Armor"
    AMULET = "Amulet"
    RING = "Ring"
    BOOTS = "Boots"

    @property
    def base_power(self) -> int:
        return _ITEM_TYPES[self][0]

    @property
    def slot(self) -> SlotType:
        return _ITEM_TYPES[self][1]


# (base power, equipment slot)
_ITEM_TYPES: Dict[ItemType, Tuple[int, SlotType]] = {
    ItemType.SWORD: (10, SlotType.WEAPON),
    ItemType.SHIELD: (8, SlotType.SHIELD),
    ItemType.HELMET: (6, SlotType.HELMET),
    ItemType.ARMOR: (12, SlotType.ARMOR),
    ItemType.AMULET: (5, SlotType.AMULET),
    ItemType.RING: (4, SlotType.RING),
    ItemType.BOOTS: (7, SlotType.BOOTS),
}


@dataclass(frozen=True)
class Item:
    """Equipment or loot.

    Items are immutable; a single instance moves between inventory, equipment
    slots and loot lists rather than being copied. ``attack``/``defense``/``speed``
    are the stat contributions the item grants while equipped.
    """

    name: str
    type: ItemType
    power: int = 0
    signature: Optional[Signature] = None
    slot: Optional[SlotType] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    attack: float = 0.0
    defense: float = 0.0
    speed: float = 0.0

    def __post_init__(self) -> None:
        if self.slot is None:
            object.__setattr__(self, "slot", self.type.slot)

    def renamed(self, name: str) -> "Item":
        """Same item identity under a new display name."""
        return replace(self, name=name)


__all__ = ["SlotType", "ItemType", "Item"]
