"""
Piece Model
===========

Piece kinds, special-piece tags and the immutable Piece value.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class PieceType(str, Enum):
    """All piece kinds. Member order defines the integer code used in observations."""
    EMPTY = "empty"
    TOAST = "toast"
    PANCAKE = "pancake"
    HONEY = "honey"
    BUTTER = "butter"
    WAFFLE = "waffle"
    SYRUP = "syrup"
    # Obstacles
    BURNT_TOAST = "burnt-toast"
    MELTING_BUTTER = "melting-butter"
    STICKY_HONEY = "sticky-honey"

    @property
    def code(self) -> int:
        """Stable integer code (EMPTY is 0)."""
        return _TYPE_CODES[self]

    @property
    def is_empty(self) -> bool:
        return self is PieceType.EMPTY

    @property
    def is_obstacle(self) -> bool:
        return self in OBSTACLE_TYPES

    @classmethod
    def from_code(cls, code: int) -> "PieceType":
        return _ALL_TYPES[code]


NORMAL_TYPES = (
    PieceType.TOAST,
    PieceType.PANCAKE,
    PieceType.HONEY,
    PieceType.BUTTER,
    PieceType.WAFFLE,
    PieceType.SYRUP,
)

OBSTACLE_TYPES = frozenset({
    PieceType.BURNT_TOAST,
    PieceType.MELTING_BUTTER,
    PieceType.STICKY_HONEY,
})

_ALL_TYPES = tuple(PieceType)
_TYPE_CODES = {t: i for i, t in enumerate(_ALL_TYPES)}


class SpecialKind(str, Enum):
    """
    Special-piece tags.

    Stored on pieces for the UI; matching and scoring do not act on them.
    """
    NONE = "none"
    STRIPED_HORIZONTAL = "striped-horizontal"
    STRIPED_VERTICAL = "striped-vertical"
    WRAPPED = "wrapped"
    COLOR_BOMB = "color-bomb"


@dataclass(frozen=True)
class Piece:
    """
    A single board cell value.

    ``id`` is only an identity token for UI list diffing; game logic compares
    pieces by ``type``.
    """
    type: PieceType
    id: str = ""
    special: SpecialKind = SpecialKind.NONE
    health: Optional[int] = None
    timer: Optional[int] = None
    sticky: bool = False

    @property
    def is_empty(self) -> bool:
        return self.type is PieceType.EMPTY

    @property
    def is_obstacle(self) -> bool:
        return self.type.is_obstacle

    def damaged(self) -> "Piece":
        """Copy with one point of health removed."""
        return replace(self, health=(self.health or 1) - 1)

    def __repr__(self) -> str:
        if self.is_empty:
            return "Piece(empty)"
        extra = ""
        if self.health is not None:
            extra += f", health={self.health}"
        if self.special is not SpecialKind.NONE:
            extra += f", special={self.special.value}"
        return f"Piece({self.type.value}{extra})"


EMPTY_PIECE = Piece(type=PieceType.EMPTY)
