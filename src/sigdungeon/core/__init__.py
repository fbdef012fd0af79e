"""Shared low-level helpers (random source)."""
from .rng import RandomSource

__all__ = ["RandomSource"]
