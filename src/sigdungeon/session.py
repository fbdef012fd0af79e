from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .combat.simulator import CombatSimulator
from .config import GameConfig
from .core.rng import RandomSource
from .errors import (
    EmptySlotError,
    InventoryFullError,
    NoActiveRunError,
    RunInProgressError,
    SlotLockedError,
)
from .exploration.explorer import DungeonExplorer
from .generation.dungeon import DungeonGenerator
from .generation.items import ItemGenerator
from .models.dungeon import Dungeon
from .models.inventory import Inventory
from .models.item import Item
from .models.player import Player
from .models.results import DungeonResult

logger = logging.getLogger(__name__)


@dataclass
class DungeonSlot:
    index: int
    unlocked: bool = False
    item: Optional[Item] = None


@dataclass(frozen=True)
class RunOutcome:
    """A finished run plus the loot that did not fit in the inventory."""

    result: DungeonResult
    overflow: List[Item] = field(default_factory=list)


class GameSession:
    """Headless game flow: inventory, dungeon slots and one run at a time.

    Life-cycle:
    - Construct with a config and a RandomSource; the inventory is seeded with starter items
    - Move an item into an unlocked dungeon slot with assign_to_slot()
    - start_dungeon() consumes the slot's item and generates a dungeon from its signature
    - complete_dungeon() (grid explorer) or simulate_dungeon() (list simulator)
      resolves the run and appends the loot to the inventory
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[RandomSource] = None,
        player: Optional[Player] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng or RandomSource()
        self.player = player or Player()
        self.item_generator = ItemGenerator(self.config)
        self.dungeon_generator = DungeonGenerator(self.config)
        self.explorer = DungeonExplorer(self.config, self.item_generator)
        self.simulator = CombatSimulator(self.config, self.item_generator)

        inv_cfg = self.config.inventory
        self.inventory = Inventory(capacity=inv_cfg.capacity)
        for _ in range(min(inv_cfg.starter_items, inv_cfg.capacity)):
            self.inventory.add(self.item_generator.generate_random(self.rng))
        self.slots: List[DungeonSlot] = [
            DungeonSlot(index=i, unlocked=i < inv_cfg.unlocked_dungeon_slots) for i in range(inv_cfg.dungeon_slots)
        ]
        self._active: Optional[Dungeon] = None
        logger.info(
            "Session ready: %d starter items, %d/%d dungeon slots unlocked",
            len(self.inventory),
            inv_cfg.unlocked_dungeon_slots,
            inv_cfg.dungeon_slots,
        )

    # ---- Equipment -----------------------------------------------------------
    def equip(self, item: Item) -> Optional[Item]:
        """Move ``item`` from the inventory onto the player; the displaced item goes back."""
        if not self.inventory.remove(item):
            raise ValueError(f"{item.name} is not in the inventory")
        previous = self.player.equip(item)
        if previous is not None:
            self.inventory.add(previous)
        return previous

    def unequip(self, item: Item) -> None:
        if self.player.equipped(item.slot) is not item:
            raise ValueError(f"{item.name} is not equipped")
        if self.inventory.is_full:
            raise InventoryFullError(f"No room to unequip {item.name}")
        self.player.unequip(item.slot)
        self.inventory.add(item)

    # ---- Dungeon slots -------------------------------------------------------
    def _slot(self, index: int) -> DungeonSlot:
        if not 0 <= index < len(self.slots):
            raise IndexError(f"Dungeon slot index out of range: {index}")
        return self.slots[index]

    def unlock_slot(self, index: int) -> None:
        slot = self._slot(index)
        if not slot.unlocked:
            slot.unlocked = True
            logger.info("Unlocked dungeon slot %d", index)

    def assign_to_slot(self, item: Item, index: int) -> Optional[Item]:
        """Move an inventory item into a dungeon slot. Returns the item it replaced, now back in the inventory."""
        slot = self._slot(index)
        if not slot.unlocked:
            raise SlotLockedError(f"Dungeon slot {index} is locked")
        if not self.inventory.remove(item):
            raise ValueError(f"{item.name} is not in the inventory")
        previous = slot.item
        if previous is not None:
            self.inventory.add(previous)
        slot.item = item
        logger.debug("Assigned %s to dungeon slot %d", item.name, index)
        return previous

    def clear_slot(self, index: int) -> Optional[Item]:
        slot = self._slot(index)
        item = slot.item
        if item is None:
            return None
        if not self.inventory.add(item):
            raise InventoryFullError(f"No room for {item.name}")
        slot.item = None
        return item

    # ---- Runs ------------------------------------------------------------------
    @property
    def active_dungeon(self) -> Optional[Dungeon]:
        return self._active

    def start_dungeon(self, index: int) -> Dungeon:
        if self._active is not None:
            raise RunInProgressError(f"{self._active.name} is still in progress")
        slot = self._slot(index)
        if not slot.unlocked:
            raise SlotLockedError(f"Dungeon slot {index} is locked")
        if slot.item is None:
            raise EmptySlotError(f"Dungeon slot {index} is empty")
        if slot.item.signature is None:
            raise ValueError(f"{slot.item.name} has no signature to seed a dungeon")
        item, slot.item = slot.item, None
        self._active = self.dungeon_generator.generate(item.signature, self.rng)
        logger.info("Started %s from %s", self._active.name, item.name)
        return self._active

    def complete_dungeon(self) -> RunOutcome:
        dungeon = self._take_active()
        return self._finish(self.explorer.explore(dungeon, self.player, self.rng))

    def simulate_dungeon(self) -> RunOutcome:
        dungeon = self._take_active()
        return self._finish(self.simulator.run(self.player, dungeon, self.rng))

    def _take_active(self) -> Dungeon:
        if self._active is None:
            raise NoActiveRunError("No dungeon run in progress; call start_dungeon() first")
        dungeon, self._active = self._active, None
        return dungeon

    def _finish(self, result: DungeonResult) -> RunOutcome:
        overflow = self.inventory.extend(result.loot)
        if overflow:
            logger.warning("Inventory full; %d loot item(s) left behind", len(overflow))
        logger.info(
            "Run finished: success=%s, loot=%d, inventory=%d/%d",
            result.success,
            len(result.loot),
            len(self.inventory),
            self.inventory.capacity,
        )
        return RunOutcome(result=result, overflow=overflow)


__all__ = ["GameSession", "DungeonSlot", "RunOutcome"]
