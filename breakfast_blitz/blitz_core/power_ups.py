"""
Power-Up Executor
=================

Consumable board mutations outside the normal swap rules, and the inventory
that gates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Union

from breakfast_blitz.blitz_core.board import Board, Coordinate
from breakfast_blitz.blitz_core.config_loader import GameConfig, get_config
from breakfast_blitz.blitz_core.exceptions import UnknownPowerUp
from breakfast_blitz.blitz_core.pieces import EMPTY_PIECE
from breakfast_blitz.blitz_core.rng import PieceGenerator
from breakfast_blitz.blitz_core.scoring import ScoreEvent


class PowerUpKey(str, Enum):
    HAMMER = "hammer"
    SHUFFLE = "shuffle"
    EXTRA_MOVES = "extraMoves"
    COLOR_BOMB = "colorBomb"
    BACON_BOMB = "baconBomb"
    MAPLE_SYRUP = "mapleSyrup"
    COFFEE_BOOST = "coffeeBoost"

    @property
    def needs_target(self) -> bool:
        return self in TARGETED_POWER_UPS

    @property
    def adds_moves(self) -> bool:
        return self in (PowerUpKey.EXTRA_MOVES, PowerUpKey.COFFEE_BOOST)

    @classmethod
    def parse(cls, key: Union[str, "PowerUpKey"]) -> "PowerUpKey":
        """Accept either a PowerUpKey or its string value."""
        try:
            return cls(key)
        except ValueError:
            raise UnknownPowerUp(key) from None


TARGETED_POWER_UPS = frozenset({
    PowerUpKey.HAMMER,
    PowerUpKey.COLOR_BOMB,
    PowerUpKey.BACON_BOMB,
    PowerUpKey.MAPLE_SYRUP,
})


class PowerUpInventory:
    """Non-negative count per power-up key."""

    def __init__(self, counts: Optional[Mapping[str, int]] = None):
        self._counts: Dict[PowerUpKey, int] = {key: 0 for key in PowerUpKey}
        for key, count in (counts or {}).items():
            if count < 0:
                raise ValueError(f"Inventory count for {key} must be >= 0, got {count}")
            self._counts[PowerUpKey.parse(key)] = int(count)

    def count(self, key: Union[str, PowerUpKey]) -> int:
        return self._counts[PowerUpKey.parse(key)]

    def can_use(self, key: Union[str, PowerUpKey]) -> bool:
        return self.count(key) > 0

    def consume(self, key: Union[str, PowerUpKey]) -> None:
        key = PowerUpKey.parse(key)
        if self._counts[key] <= 0:
            raise ValueError(f"No {key.value} power-ups left")
        self._counts[key] -= 1

    def add(self, key: Union[str, PowerUpKey], amount: int = 1) -> None:
        if amount < 0:
            raise ValueError(f"Cannot add a negative amount ({amount})")
        self._counts[PowerUpKey.parse(key)] += amount

    def as_dict(self) -> Dict[str, int]:
        """Plain ``{key: count}`` copy keyed by string values."""
        return {key.value: count for key, count in self._counts.items()}

    def copy(self) -> "PowerUpInventory":
        return PowerUpInventory(self.as_dict())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PowerUpInventory):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        return f"PowerUpInventory({self.as_dict()})"


@dataclass
class PowerUpResult:
    """
    Result of a power-up activation.

    ``applied`` is False when the activation was refused; the board is then
    the caller's board unchanged.
    """
    applied: bool
    key: PowerUpKey
    board: Board
    score_delta: int = 0
    affected: List[Coordinate] = field(default_factory=list)
    moves_added: int = 0
    events: List[ScoreEvent] = field(default_factory=list)
    status: Optional[str] = None
    reason: str = ""

    @staticmethod
    def refused(key: PowerUpKey, board: Board, reason: str) -> "PowerUpResult":
        return PowerUpResult(applied=False, key=key, board=board, reason=reason)


class PowerUpExecutor:
    """
    Applies power-up effects to a clone of the board.

    Board-changing power-ups finish with a single gravity/refill pass. They do
    not start a cascade, so runs formed by the refill stay on the board until
    the next swap.
    """

    def __init__(
        self,
        generator: PieceGenerator,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize executor.

        Args:
            generator: Source of refill pieces and shuffle randomness.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._generator = generator

    def apply(
        self,
        board: Board,
        key: Union[str, PowerUpKey],
        row: Optional[int] = None,
        col: Optional[int] = None
    ) -> PowerUpResult:
        """
        Apply a power-up. Inventory is the caller's concern.

        Args:
            board: Current board (not modified).
            key: Power-up to apply.
            row: Target row for targeted power-ups.
            col: Target column for targeted power-ups.

        Raises:
            UnknownPowerUp: If ``key`` is not a power-up.
            InvalidCoordinate: If a targeted power-up has no valid target.
        """
        key = PowerUpKey.parse(key)

        if key.adds_moves:
            bonus = (
                self._config.power_ups.extra_moves_bonus
                if key is PowerUpKey.EXTRA_MOVES
                else self._config.power_ups.coffee_boost_bonus
            )
            return PowerUpResult(applied=True, key=key, board=board, moves_added=bonus)

        target = board.check_coordinate(row, col) if key.needs_target else None
        working = board.clone()

        # Each effect returns (touched cells, cells that earned points, points)
        if key is PowerUpKey.HAMMER:
            affected, scored, points = self._hammer(working, target)
        elif key is PowerUpKey.SHUFFLE:
            affected, scored, points = self._shuffle(working)
        elif key is PowerUpKey.COLOR_BOMB:
            affected, scored, points = self._color_bomb(working, target)
        elif key is PowerUpKey.BACON_BOMB:
            affected, scored, points = self._bacon_bomb(working, target)
        else:
            affected, scored, points = self._maple_syrup(working, target)

        working.apply_gravity(self._generator)

        events = []
        if points:
            events.append(ScoreEvent(points=points, source=key.value, cells=scored))
        return PowerUpResult(
            applied=True,
            key=key,
            board=working,
            score_delta=points,
            affected=affected,
            events=events
        )

    def _hammer(self, board: Board, target: Coordinate):
        board[target] = EMPTY_PIECE
        return [target], 1, self._config.scoring.hammer_points

    def _shuffle(self, board: Board):
        positions = [coord for coord, piece in board.cells() if not piece.is_empty]
        pieces = [board[coord] for coord in positions]
        self._generator.shuffle(pieces)
        for coord, piece in zip(positions, pieces):
            board[coord] = piece
        return positions, 0, 0

    def _color_bomb(self, board: Board, target: Coordinate):
        target_type = board[target].type
        if target_type.is_empty:
            return [], 0, 0
        affected = board.coordinates_of(target_type)
        board.clear(affected)
        return affected, len(affected), len(affected) * self._config.scoring.color_bomb_points

    def _bacon_bomb(self, board: Board, target: Coordinate):
        # Row then column; the crossing cell is only hit once
        line = [Coordinate(target.row, c) for c in range(board.size)]
        line += [Coordinate(r, target.col) for r in range(board.size) if r != target.row]

        affected: List[Coordinate] = []
        cleared = 0
        for coord in line:
            piece = board[coord]
            if piece.is_empty:
                continue
            affected.append(coord)
            if piece.health is not None and piece.health > 1:
                board[coord] = piece.damaged()
            else:
                board[coord] = EMPTY_PIECE
                cleared += 1
        return affected, cleared, cleared * self._config.scoring.bacon_bomb_points

    def _maple_syrup(self, board: Board, target: Coordinate):
        target_type = board[target].type
        if target_type.is_empty:
            return [], 0, 0
        affected = board.coordinates_of(target_type)
        for coord in affected:
            board[coord] = self._generator.normal_piece()
        return affected, len(affected), len(affected) * self._config.scoring.maple_syrup_points
