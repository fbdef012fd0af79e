from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Event types forwarded at INFO; everything else goes out at DEBUG.
NOTABLE_EVENTS = frozenset({"defeat", "player_defeat", "summary", "loot"})


@dataclass(frozen=True)
class CombatEvent:
    """One narrative line of a run.

    Common event types: "encounter", "attack", "defeat", "timeout", "recover",
    "move", "loot", "summary".
    """

    type: str
    message: str
    data: Optional[Dict[str, Any]] = None


class CombatLog:
    """Ordered, in-memory narrative of a dungeon run.

    The message list ends up verbatim in DungeonResult.combat_log.
    """

    def __init__(self) -> None:
        self._events: List[CombatEvent] = []

    def add(self, event_type: str, message: str, **data: Any) -> None:
        ev = CombatEvent(type=event_type, message=message, data=data or None)
        self._events.append(ev)
        # Forward to standard logging for visibility if configured.
        if event_type in NOTABLE_EVENTS:
            logger.info(message)
        else:
            logger.debug(message)

    def events(self) -> List[CombatEvent]:
        return list(self._events)

    def of_type(self, event_type: str) -> List[CombatEvent]:
        return [e for e in self._events if e.type == event_type]

    def lines(self) -> Tuple[str, ...]:
        return tuple(e.message for e in self._events)

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        self._events.clear()


__all__ = ["CombatEvent", "CombatLog", "NOTABLE_EVENTS"]
