"""
Shared fixtures for the match core tests.

Boards are written as strings, one character per cell:

    T toast   P pancake   H honey   B butter   W waffle   S syrup
    . empty   X burnt-toast
"""

from collections import deque
from dataclasses import replace

import pytest

from breakfast_blitz.blitz_core.board import Board
from breakfast_blitz.blitz_core.config_loader import load_config
from breakfast_blitz.blitz_core.level_catalog import Level
from breakfast_blitz.blitz_core.pieces import PieceType
from breakfast_blitz.blitz_core.rng import PieceGenerator

LETTERS = {
    "T": PieceType.TOAST,
    "P": PieceType.PANCAKE,
    "H": PieceType.HONEY,
    "B": PieceType.BUTTER,
    "W": PieceType.WAFFLE,
    "S": PieceType.SYRUP,
    ".": PieceType.EMPTY,
    "X": PieceType.BURNT_TOAST,
}


def grid(*rows: str) -> Board:
    """Board from letter rows, e.g. ``grid("TPH", "PHT", "HTP")``."""
    return Board.from_types([[LETTERS[ch] for ch in row] for row in rows])


def letters(board: Board) -> list:
    """Inverse of ``grid``: the board as letter rows."""
    lookup = {kind: ch for ch, kind in LETTERS.items()}
    return ["".join(lookup[kind] for kind in row) for row in board.type_grid()]


class ScriptedGenerator(PieceGenerator):
    """
    PieceGenerator whose normal kinds come from a fixed script.

    Once the script runs out it falls back to the seeded random choice.
    """

    def __init__(self, config, script: str = "", seed: int = 0):
        super().__init__(config, seed)
        self._script = deque(LETTERS[ch] for ch in script)

    @property
    def remaining(self) -> int:
        return len(self._script)

    def push(self, script: str) -> None:
        self._script.extend(LETTERS[ch] for ch in script)

    def _choose_normal_type(self) -> PieceType:
        if self._script:
            return self._script.popleft()
        return super()._choose_normal_type()


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def small_config(config):
    """Default config on a 4x4 board."""
    return replace(config, board=replace(config.board, size=4))


@pytest.fixture
def generator(config):
    return PieceGenerator(config, seed=42)


@pytest.fixture
def make_board():
    return grid


@pytest.fixture
def board_letters():
    return letters


@pytest.fixture
def scripted(config):
    """Factory: ``scripted("TPH...")`` returns a ScriptedGenerator."""
    def _make(script: str = "", cfg=None, seed: int = 0) -> ScriptedGenerator:
        return ScriptedGenerator(cfg or config, script, seed)
    return _make


@pytest.fixture
def make_level():
    """Factory for a throwaway level with the given target and move allowance."""
    def _make(target_score: int = 10_000, moves: int = 10) -> Level:
        return Level(
            id=1,
            name="Test Kitchen",
            objective=f"Score {target_score} points",
            target_score=target_score,
            moves=moves
        )
    return _make
