from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..config import GameConfig
from .item import Item, SlotType
from .results import PlayerStats

logger = logging.getLogger(__name__)


def _empty_slots() -> Dict[SlotType, Optional[Item]]:
    return {slot: None for slot in SlotType}


@dataclass
class Player:
    """The adventurer: a name and one item per equipment slot.

    Stats are never stored; calculate_stats() derives them from the current
    equipment every time so equipping or unequipping needs no cache reset.
    """

    name: str = "Player"
    equipment: Dict[SlotType, Optional[Item]] = field(default_factory=_empty_slots)

    def equip(self, item: Item) -> Optional[Item]:
        """Place ``item`` in its slot and return whatever was there before."""
        previous = self.equipment.get(item.slot)
        self.equipment[item.slot] = item
        logger.debug("%s equipped %s in %s", self.name, item.name, item.slot.value)
        return previous

    def unequip(self, slot: SlotType) -> Optional[Item]:
        previous = self.equipment.get(slot)
        self.equipment[slot] = None
        return previous

    def equipped(self, slot: SlotType) -> Optional[Item]:
        return self.equipment.get(slot)

    def equipped_items(self) -> List[Item]:
        return [it for it in self.equipment.values() if it is not None]

    def calculate_stats(self, config: Optional[GameConfig] = None) -> PlayerStats:
        base = (config or GameConfig()).player
        attack = base.base_attack
        defense = base.base_defense
        speed = base.base_speed
        for item in self.equipped_items():
            attack += item.attack
            defense += item.defense
            speed += item.speed
        return PlayerStats(
            max_health=base.base_health,
            attack=attack,
            defense=defense,
            speed=speed,
            remaining_health=base.base_health,
        )


__all__ = ["Player"]
