from __future__ import annotations

import logging
from typing import List, Optional

from ..catalog import describe
from ..config import GameConfig
from ..core.rng import RandomSource
from ..models.item import Item, ItemType
from ..signature import Signature

logger = logging.getLogger(__name__)

ITEM_TYPES: List[ItemType] = list(ItemType)


class ItemGenerator:
    """Produces items whose power and stat contributions follow from their signature.

    Two entry points: a fully random item, or one themed on a base signature
    (dungeon loot, enemy drops). Both draw every random value from the supplied
    RandomSource, including the item id.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()

    def generate_random(self, rng: RandomSource) -> Item:
        item_type = rng.choice(ITEM_TYPES)
        signature = Signature.create_random(rng)
        return self._build(item_type, signature, rng)

    def generate_with_signature(
        self, base: Signature, rng: RandomSource, variance: Optional[float] = None
    ) -> Item:
        if variance is None:
            variance = self.config.signature.default_variance
        item_type = rng.choice(ITEM_TYPES)
        signature = Signature.create_similar(base, variance, rng)
        return self._build(item_type, signature, rng)

    # ---- Derivation --------------------------------------------------------
    def _build(self, item_type: ItemType, signature: Signature, rng: RandomSource) -> Item:
        name = self.item_name(item_type, signature, rng)
        power = int(item_type.base_power * (1 + signature.intensity()))
        attack, defense, speed = self.contributions(power, signature)
        item = Item(
            name=name,
            type=item_type,
            power=power,
            signature=signature,
            id=str(rng.uuid4()),
            attack=attack,
            defense=defense,
            speed=speed,
        )
        logger.debug("Generated %s (power=%d, sig=%s)", item.name, power, signature)
        return item

    def item_name(self, item_type: ItemType, signature: Signature, rng: RandomSource) -> str:
        """One or two descriptors in front of the type name; bare type name when none apply."""
        sig_cfg = self.config.signature
        words = describe(signature, sig_cfg.high_threshold, sig_cfg.low_threshold)
        if not words:
            return item_type.value
        count = min(len(words), rng.randint(1, 2))
        picked = rng.sample(words, count)
        return " ".join(picked + [item_type.value])

    def contributions(self, power: int, signature: Signature) -> tuple:
        """(attack, defense, speed) an item of this power and signature grants."""
        sig_cfg = self.config.signature
        loot_cfg = self.config.loot
        high, low = sig_cfg.high_threshold, sig_cfg.low_threshold
        attack = power * loot_cfg.base_attack_share
        defense = power * loot_cfg.base_defense_share
        speed = 0.0
        if signature.temperature > high:
            attack += power * loot_cfg.hot_attack_share
        if signature.temperature < low:
            defense += power * loot_cfg.cold_defense_share
        if signature.hardness > high:
            defense += power * loot_cfg.hard_defense_share
        if signature.hardness < low:
            speed += power * loot_cfg.soft_speed_share
        return attack, defense, speed


__all__ = ["ItemGenerator", "ITEM_TYPES"]
