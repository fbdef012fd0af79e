from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .signature import Signature


class SignatureDimension(IntEnum):
    """Semantic meaning of each signature component, in vector order."""

    TEMPERATURE = 0
    HARDNESS = 1
    WETNESS = 2
    LUMINOSITY = 3
    WEIGHT = 4
    CONDUCTIVITY = 5
    VOLATILITY = 6
    RESONANCE = 7

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def low(self) -> str:
        """Descriptor used when the component is strongly negative."""
        return _DESCRIPTORS[self][0]

    @property
    def high(self) -> str:
        """Descriptor used when the component is strongly positive."""
        return _DESCRIPTORS[self][1]


# (low, high) descriptor words per dimension
_DESCRIPTORS: Dict[SignatureDimension, Tuple[str, str]] = {
    SignatureDimension.TEMPERATURE: ("Cold", "Hot"),
    SignatureDimension.HARDNESS: ("Soft", "Hard"),
    SignatureDimension.WETNESS: ("Dry", "Wet"),
    SignatureDimension.LUMINOSITY: ("Dark", "Bright"),
    SignatureDimension.WEIGHT: ("Light", "Heavy"),
    SignatureDimension.CONDUCTIVITY: ("Insulating", "Conductive"),
    SignatureDimension.VOLATILITY: ("Stable", "Volatile"),
    SignatureDimension.RESONANCE: ("Dissonant", "Resonant"),
}

DIMENSIONS: int = len(SignatureDimension)


def descriptor_for(dimension: SignatureDimension, value: float, high: float = 0.5, low: float = -0.5) -> Optional[str]:
    """Return the descriptor for one component, or None when it is within thresholds."""
    if value > high:
        return dimension.high
    if value < low:
        return dimension.low
    return None


def describe(signature: "Signature", high: float = 0.5, low: float = -0.5) -> List[str]:
    """Descriptor words for every dimension past a threshold, in index order."""
    words: List[str] = []
    for dim in SignatureDimension:
        word = descriptor_for(dim, signature[dim], high, low)
        if word is not None:
            words.append(word)
    return words


def first_descriptor(signature: "Signature", high: float = 0.5, low: float = -0.5) -> Optional[str]:
    """The first descriptor found scanning dimensions in index order."""
    for dim in SignatureDimension:
        word = descriptor_for(dim, signature[dim], high, low)
        if word is not None:
            return word
    return None


__all__ = ["SignatureDimension", "DIMENSIONS", "descriptor_for", "describe", "first_descriptor"]
