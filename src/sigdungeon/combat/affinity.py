from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from ..config import CombatConfig, GameConfig
from ..models.item import Item
from ..models.player import Player
from ..models.results import PlayerStats
from ..signature import Signature

logger = logging.getLogger(__name__)


def affinity_bonus(items: Iterable[Optional[Item]], signature: Signature, scale: float = 1.0) -> float:
    """Average similarity between the items' signatures and ``signature``.

    Items without a signature (and None entries) are skipped. No items means 0.
    """
    total = 0.0
    count = 0
    for item in items:
        if item is None or item.signature is None:
            continue
        total += item.signature.similarity(signature) * scale
        count += 1
    return total / count if count else 0.0


def apply_affinity(stats: PlayerStats, bonus: float, config: Optional[CombatConfig] = None) -> PlayerStats:
    """Scale attack, defense and speed by the configured affinity weights."""
    cfg = config or CombatConfig()
    return PlayerStats(
        max_health=stats.max_health,
        attack=stats.attack * (1 + bonus * cfg.affinity_attack_bonus),
        defense=stats.defense * (1 + bonus * cfg.affinity_defense_bonus),
        speed=stats.speed * (1 + bonus * cfg.affinity_speed_bonus),
        remaining_health=stats.remaining_health,
    )


def format_bonus(bonus: float) -> str:
    """Whole-percent rendering used in the run narrative, e.g. ``87%``."""
    return f"{bonus:.0%}"


def adjusted_stats(
    player: Player,
    signature: Signature,
    config: Optional[GameConfig] = None,
    selected_item: Optional[Item] = None,
) -> Tuple[PlayerStats, float]:
    """Player stats for a run against ``signature`` plus the affinity bonus behind them.

    ``selected_item`` joins the equipped items in the affinity average without
    contributing its stats.
    """
    cfg = config or GameConfig()
    items: List[Item] = player.equipped_items()
    if selected_item is not None:
        items.append(selected_item)
    bonus = affinity_bonus(items, signature, cfg.combat.affinity_scale_factor)
    stats = apply_affinity(player.calculate_stats(cfg), bonus, cfg.combat)
    logger.debug("Affinity bonus %.3f over %d item(s)", bonus, len(items))
    return stats, bonus


__all__ = ["affinity_bonus", "apply_affinity", "adjusted_stats", "format_bonus"]
