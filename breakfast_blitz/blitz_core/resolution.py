"""
Resolution Engine
=================

Resolves one swap: match detection, removal, gravity/refill and cascades.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from breakfast_blitz.blitz_core.board import Board, Coordinate
from breakfast_blitz.blitz_core.config_loader import GameConfig, get_config
from breakfast_blitz.blitz_core.match_detector import find_matches
from breakfast_blitz.blitz_core.rng import PieceGenerator
from breakfast_blitz.blitz_core.scoring import ScoreEvent


@dataclass
class CascadeOutcome:
    """Totals from running the cascade loop to exhaustion."""
    passes: int = 0
    cleared: int = 0
    points: int = 0
    events: List[ScoreEvent] = field(default_factory=list)


@dataclass
class MoveResult:
    """
    Result of resolving a swap.

    ``board`` is a new Board when ``matched`` is true, otherwise the caller's
    board unchanged. ``status`` and ``moves_remaining`` are filled in by the
    session once the move is charged.
    """
    matched: bool
    board: Board
    swap: Tuple[Coordinate, Coordinate]
    score_delta: int = 0
    cleared: int = 0
    cascades: int = 0
    events: List[ScoreEvent] = field(default_factory=list)
    status: Optional[str] = None
    moves_remaining: Optional[int] = None
    reason: str = ""

    @staticmethod
    def rejected(board: Board, swap: Tuple[Coordinate, Coordinate], reason: str) -> "MoveResult":
        return MoveResult(matched=False, board=board, swap=swap, reason=reason)


class ResolutionEngine:
    """
    Stateless swap resolver.

    Holds no reference to any board between calls. Each call clones the board
    it is given, so the caller's board is never modified.
    """

    def __init__(
        self,
        generator: PieceGenerator,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize engine.

        Args:
            generator: Source of refill pieces.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._generator = generator

    def resolve_swap(
        self,
        board: Board,
        source: Coordinate,
        destination: Coordinate
    ) -> MoveResult:
        """
        Swap two cells and resolve all resulting matches.

        Args:
            board: Current board (not modified).
            source: First cell.
            destination: Second cell.

        Returns:
            MoveResult; ``matched`` is False when the swap forms no run.
        """
        working = board.clone()
        working.swap(source, destination)

        if not find_matches(working):
            return MoveResult.rejected(board, (source, destination), "no_match")

        outcome = self.run_cascade(working)
        return MoveResult(
            matched=True,
            board=working,
            swap=(source, destination),
            score_delta=outcome.points,
            cleared=outcome.cleared,
            cascades=outcome.passes,
            events=outcome.events
        )

    def run_cascade(self, board: Board) -> CascadeOutcome:
        """
        Remove, drop, refill and rescan until a pass finds no match.

        Mutates ``board`` in place; callers pass a clone.
        """
        outcome = CascadeOutcome()
        matches = find_matches(board)
        while matches:
            outcome.passes += 1
            cleared = board.clear(matches)
            points = cleared * self._config.scoring.match_points
            outcome.cleared += cleared
            outcome.points += points
            outcome.events.append(
                ScoreEvent(points=points, source="match", cells=cleared, cascade=outcome.passes)
            )
            board.apply_gravity(self._generator)
            matches = find_matches(board)
        return outcome
