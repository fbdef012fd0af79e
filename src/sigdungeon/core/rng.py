from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass
from typing import List, MutableSequence, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RandomSource:
    """
    Deterministic-friendly RNG wrapper around random.Random.

    Every generator and combat driver receives one of these explicitly instead
    of reaching for the module-level ``random`` functions, so a seed plus an
    input signature always replays the same dungeon and the same fight.
    """

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)
        if self.seed is not None:
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.seed)
        else:
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def random(self) -> float:
        """Return the next random float in the range [0.0, 1.0)."""
        return self._rng.random()

    def uniform(self, a: float, b: float) -> float:
        """Return a random float N such that a <= N <= b."""
        return self._rng.uniform(a, b)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._rng.randint(a, b)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self._rng.random() < probability

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise ValueError("RandomSource.choice() received an empty sequence")
        return seq[self._rng.randrange(len(seq))]

    def shuffle(self, items: MutableSequence[T]) -> None:
        self._rng.shuffle(items)

    def sample(self, population: Sequence[T], k: int) -> List[T]:
        return self._rng.sample(population, k)

    def uuid4(self) -> uuid.UUID:
        """
        UUID-like value drawn from the RNG stream (not a true UUID4 but stable for a seed).
        """
        raw = list(bytes(self._rng.getrandbits(8) for _ in range(16)))
        # Force version 4 and variant bits to be UUID-like
        raw[6] = (raw[6] & 0x0F) | 0x40
        raw[8] = (raw[8] & 0x3F) | 0x80
        return uuid.UUID(bytes=bytes(raw))

    def state(self):
        """Return the internal PRNG state for debugging or replays."""
        return self._rng.getstate()

    def set_state(self, state) -> None:
        """Restore the internal PRNG state."""
        self._rng.setstate(state)


__all__ = ["RandomSource"]
