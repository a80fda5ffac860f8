"""
Seeded pseudo-random primitives.

Every function here is pure: the same seed always yields the same result and
no module-level state is kept. Seeds are unsigned 32-bit integers.
"""

from dataclasses import dataclass
from typing import List

BOARD_SIZE = 40

_MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiplication."""
    return (a * b) & _MASK32


def next_seed(seed: int) -> int:
    """Advance a seed with the linear-congruential step."""
    return (seed * 1664525 + 1013904223) & _MASK32


def rand(seed: int) -> float:
    """Map a seed to a float in [0, 1) using mulberry32 bit mixing."""
    t = (seed + 0x6D2B79F5) & _MASK32
    t = _imul(t ^ (t >> 15), t | 1)
    t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
    return ((t ^ (t >> 14)) & _MASK32) / 4294967296


@dataclass(frozen=True)
class DiceRoll:
    """Result of rolling two dice, with the seed to use next."""

    d1: int
    d2: int
    seed: int

    @property
    def total(self) -> int:
        return self.d1 + self.d2


def roll_dice(seed: int) -> DiceRoll:
    """Roll two six-sided dice from a seed."""
    s1 = next_seed(seed)
    d1 = int(rand(s1) * 6) + 1
    s2 = next_seed(s1)
    d2 = int(rand(s2) * 6) + 1
    return DiceRoll(d1, d2, next_seed(s2))


def wrap(pos: int) -> int:
    """Wrap any integer (negative included) onto the board."""
    return ((pos % BOARD_SIZE) + BOARD_SIZE) % BOARD_SIZE


def shuffled_deck(length: int, seed: int) -> List[int]:
    """
    Shuffle the indices 0..length-1 with a seeded Fisher-Yates pass.

    Args:
        length: Number of cards in the deck
        seed: Seed driving the swaps

    Returns:
        A new list holding a permutation of range(length)
    """
    deck = list(range(length))
    s = seed & _MASK32
    for i in range(length - 1, 0, -1):
        s = next_seed(s)
        j = int(((s % 1000) / 1000) * (i + 1)) % (i + 1)
        deck[i], deck[j] = deck[j], deck[i]
    return deck
