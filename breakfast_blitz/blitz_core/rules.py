"""
Game Rules
==========

Swap validation and terminal status evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from breakfast_blitz.blitz_core.board import Board, Coordinate, are_adjacent
from breakfast_blitz.blitz_core.config_loader import GameConfig, get_config
from breakfast_blitz.blitz_core.exceptions import NonAdjacentSwap


class GameStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"
    PAUSED = "paused"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST)


@dataclass
class TerminationResult:
    """Result of a terminal-status check."""
    status: GameStatus
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(GameStatus.PLAYING, "")

    @staticmethod
    def won() -> "TerminationResult":
        return TerminationResult(GameStatus.WON, "target_score")

    @staticmethod
    def lost() -> "TerminationResult":
        return TerminationResult(GameStatus.LOST, "out_of_moves")


class SwapRules:
    """
    Validates proposed swaps.

    Adjacency is enforced when ``rules.require_adjacent`` is set.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._require_adjacent = config.rules.require_adjacent

    @property
    def require_adjacent(self) -> bool:
        return self._require_adjacent

    def validate(self, board: Board, from_row, from_col, to_row, to_col) -> Tuple[Coordinate, Coordinate]:
        """
        Check a swap against the board.

        Returns:
            (source, destination) Coordinates.

        Raises:
            InvalidCoordinate: If either cell is off the board.
            NonAdjacentSwap: If adjacency is required and the cells don't touch.
        """
        source = board.check_coordinate(from_row, from_col)
        destination = board.check_coordinate(to_row, to_col)
        if self._require_adjacent and not are_adjacent(source, destination):
            raise NonAdjacentSwap(
                f"Cells ({source.row}, {source.col}) and "
                f"({destination.row}, {destination.col}) are not adjacent"
            )
        return source, destination


class TerminationRules:
    """
    Decides whether a level attempt has ended.

    The score target is checked before move exhaustion, so reaching the
    target on the last move wins.
    """

    def check_termination(
        self,
        score: int,
        target_score: int,
        moves_remaining: int
    ) -> TerminationResult:
        """
        Check terminal conditions after a move.

        Args:
            score: Cumulative session score.
            target_score: Level target.
            moves_remaining: Moves left after the move was charged.
        """
        if score >= target_score:
            return TerminationResult.won()
        if moves_remaining <= 0:
            return TerminationResult.lost()
        return TerminationResult.none()

    def check_win(self, score: int, target_score: int) -> TerminationResult:
        """Win-only check used after power-ups, which never consume moves."""
        if score >= target_score:
            return TerminationResult.won()
        return TerminationResult.none()


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.swap = SwapRules(config)
        self.termination = TerminationRules()
