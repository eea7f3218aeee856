"""
Match Detector
==============

Finds horizontal and vertical runs of three or more same-type pieces.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Set, Tuple

from breakfast_blitz.blitz_core.board import Board, Coordinate
from breakfast_blitz.blitz_core.pieces import PieceType

MIN_RUN_LENGTH = 3


class Orientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Run:
    """A maximal line of at least MIN_RUN_LENGTH same-type pieces."""
    orientation: Orientation
    piece_type: PieceType
    cells: Tuple[Coordinate, ...]

    @property
    def length(self) -> int:
        return len(self.cells)

    def __repr__(self) -> str:
        start = self.cells[0]
        return (
            f"Run({self.orientation.value}, {self.piece_type.value} x{self.length} "
            f"@ ({start.row}, {start.col}))"
        )


def _scan_line(
    board: Board,
    line: List[Coordinate],
    orientation: Orientation,
    runs: List[Run]
) -> None:
    """Append every run found along one row or column."""
    run_start = 0
    current = board[line[0]].type
    for i in range(1, len(line) + 1):
        piece_type = board[line[i]].type if i < len(line) else None
        if piece_type is current and current is not PieceType.EMPTY:
            continue
        if i - run_start >= MIN_RUN_LENGTH and current is not PieceType.EMPTY:
            runs.append(Run(orientation, current, tuple(line[run_start:i])))
        run_start = i
        current = piece_type


def find_runs(board: Board) -> List[Run]:
    """
    Scan rows left to right, then columns top to bottom.

    A cell on both a horizontal and a vertical run appears in both runs.
    """
    runs: List[Run] = []
    size = board.size
    for row in range(size):
        _scan_line(board, [Coordinate(row, col) for col in range(size)], Orientation.HORIZONTAL, runs)
    for col in range(size):
        _scan_line(board, [Coordinate(row, col) for row in range(size)], Orientation.VERTICAL, runs)
    return runs


def find_matches(board: Board) -> Set[Coordinate]:
    """
    Coordinates belonging to at least one run.

    Overlapping horizontal and vertical runs share cells; the result is a set,
    so each matched cell appears (and later scores) once.
    """
    matches: Set[Coordinate] = set()
    for run in find_runs(board):
        matches.update(run.cells)
    return matches


def has_match(board: Board) -> bool:
    return bool(find_runs(board))
