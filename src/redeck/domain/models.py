"""
Domain models for deck files.

These are pure, immutable data structures with no I/O. Updates always build a
new record (``dataclasses.replace``) instead of assigning fields, so structural
equality doubles as an exact round-trip check.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import NewType

from .constants import LF

ItemId = NewType("ItemId", str)


class State(IntEnum):
    """Scheduling state of a card (0=New, 1=Learning, 2=Review, 3=Relearning)."""

    NEW = 0
    LEARNING = 1
    REVIEW = 2
    RELEARNING = 3


class Grade(IntEnum):
    """Self-assessment outcome fed back into scheduling."""

    AGAIN = 0
    HARD = 1
    GOOD = 2
    EASY = 3


@dataclass(frozen=True)
class NumericField:
    """
    A scheduling number that remembers how it was written.

    Attributes:
        value: Parsed number, used for computation.
        raw: Original text, used for serialization ("5.20" stays "5.20").
    """

    value: float
    raw: str


@dataclass(frozen=True)
class ItemMetadata:
    """
    Scheduling metadata of a single card, one per metadata line.

    Attributes:
        id: Stable card identifier.
        stability: Memory stability in days.
        difficulty: Card difficulty.
        state: Scheduling state.
        learning_steps: Steps taken in the current (re)learning phase.
        last_review: UTC instant of the last review, None for unreviewed cards.
    """

    id: ItemId
    stability: NumericField
    difficulty: NumericField
    state: State
    learning_steps: int
    last_review: datetime | None = None


@dataclass(frozen=True)
class Item:
    """One block of a deck: consecutive metadata lines plus shared content."""

    cards: tuple[ItemMetadata, ...]
    content: str


@dataclass(frozen=True)
class ParsedFile:
    """
    A whole deck document.

    Attributes:
        preamble: Text before the first metadata line, kept verbatim.
        items: Items in file order.
        newline: Terminator written after each metadata line.
    """

    preamble: str
    items: tuple[Item, ...] = field(default_factory=tuple)
    newline: str = LF

    @property
    def card_count(self) -> int:
        return sum(len(item.cards) for item in self.items)
