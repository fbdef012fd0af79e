from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator, Tuple

from .catalog import DIMENSIONS, SignatureDimension
from .errors import SignatureError, SignatureIndexError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .core.rng import RandomSource

# Components live in [-1, 1], so each axis spans at most 2 (squared: 4).
MAX_DISTANCE: float = math.sqrt(DIMENSIONS * 4)


def clamp(value: float, lo: float = -1.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class Signature:
    """Immutable magical signature: one float per SignatureDimension.

    Items, tiles, enemies and dungeons all carry one, and any two can be
    compared with distance()/similarity() to measure thematic affinity.
    """

    values: Tuple[float, ...]

    def __post_init__(self) -> None:
        try:
            values = tuple(float(v) for v in self.values)
        except (TypeError, ValueError) as exc:
            raise SignatureError("Signature values must be numbers") from exc
        if not all(math.isfinite(v) for v in values):
            raise SignatureError("Signature values must be finite")
        if len(values) != DIMENSIONS:
            raise SignatureError(f"Signature must have exactly {DIMENSIONS} dimensions, got {len(values)}")
        object.__setattr__(self, "values", values)

    # ---- Construction ----------------------------------------------------
    @classmethod
    def from_values(cls, values: Iterable[float]) -> "Signature":
        return cls(tuple(values))

    @classmethod
    def zero(cls) -> "Signature":
        return cls((0.0,) * DIMENSIONS)

    @classmethod
    def create_random(cls, rng: "RandomSource") -> "Signature":
        """Every component drawn independently and uniformly from [-1, 1]."""
        return cls(tuple(rng.uniform(-1.0, 1.0) for _ in range(DIMENSIONS)))

    @classmethod
    def create_similar(cls, base: "Signature", variance: float, rng: "RandomSource") -> "Signature":
        """Jitter each component of ``base`` by up to +/- variance, clamped to [-1, 1]."""
        return cls(tuple(clamp(base[i] + rng.uniform(-variance, variance)) for i in range(DIMENSIONS)))

    # ---- Access ------------------------------------------------------------
    def __getitem__(self, index: int) -> float:
        i = int(index)
        if not 0 <= i < DIMENSIONS:
            raise SignatureIndexError(f"Signature dimension index out of range: {index}")
        return self.values[i]

    def __len__(self) -> int:
        return DIMENSIONS

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    @property
    def temperature(self) -> float:
        return self[SignatureDimension.TEMPERATURE]

    @property
    def hardness(self) -> float:
        return self[SignatureDimension.HARDNESS]

    @property
    def wetness(self) -> float:
        return self[SignatureDimension.WETNESS]

    @property
    def luminosity(self) -> float:
        return self[SignatureDimension.LUMINOSITY]

    @property
    def weight(self) -> float:
        return self[SignatureDimension.WEIGHT]

    @property
    def conductivity(self) -> float:
        return self[SignatureDimension.CONDUCTIVITY]

    @property
    def volatility(self) -> float:
        return self[SignatureDimension.VOLATILITY]

    @property
    def resonance(self) -> float:
        return self[SignatureDimension.RESONANCE]

    # ---- Metrics -------------------------------------------------------------
    def distance(self, other: "Signature") -> float:
        """Euclidean distance over all components."""
        return math.sqrt(sum((a - b) ** 2 for a, b in zip(self.values, other.values)))

    def similarity(self, other: "Signature") -> float:
        """1 for identical signatures, 0 for maximally different ones; never negative."""
        return 1.0 - min(self.distance(other) / MAX_DISTANCE, 1.0)

    def intensity(self) -> float:
        """Mean absolute component; how far the signature sits from neutral."""
        return sum(abs(v) for v in self.values) / DIMENSIONS

    def __str__(self) -> str:
        return "[" + ", ".join(f"{v:+.2f}" for v in self.values) + "]"


__all__ = ["Signature", "MAX_DISTANCE", "clamp"]
