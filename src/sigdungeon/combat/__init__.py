from .affinity import adjusted_stats, affinity_bonus, apply_affinity
from .damage import DamageBreakdown, DamageCalculator
from .engine import CombatEngine, FightOutcome
from .log import CombatEvent, CombatLog
from .simulator import CombatSimulator

__all__ = [
    "adjusted_stats",
    "affinity_bonus",
    "apply_affinity",
    "DamageBreakdown",
    "DamageCalculator",
    "CombatEngine",
    "FightOutcome",
    "CombatEvent",
    "CombatLog",
    "CombatSimulator",
]
