"""
State Snapshot
==============

Read-only view of a session, plus packing into numpy arrays for
Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import numpy as np

from breakfast_blitz.blitz_core.board import Board
from breakfast_blitz.blitz_core.level_catalog import Level
from breakfast_blitz.blitz_core.power_ups import PowerUpKey
from breakfast_blitz.blitz_core.rules import GameStatus

STATUS_CODES = {status: i for i, status in enumerate(GameStatus)}


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Session state at one point in time.

    ``board`` is a private copy; mutating it does not affect the session.
    """
    level: Level
    board: Board
    score: int
    moves_remaining: int
    status: GameStatus
    power_up_inventory: Dict[str, int]

    @property
    def target_score(self) -> int:
        return self.level.target_score

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "board": self.board.to_array(),
            "score": np.array(self.score, dtype=np.int64),
            "target_score": np.array(self.level.target_score, dtype=np.int64),
            "moves_remaining": np.array(self.moves_remaining, dtype=np.int32),
            "status": np.array(STATUS_CODES[self.status], dtype=np.int32),
            "inventory": np.array(
                [self.power_up_inventory.get(key.value, 0) for key in PowerUpKey],
                dtype=np.int32
            ),
        }


def build_snapshot(
    level: Level,
    board: Board,
    score: int,
    moves_remaining: int,
    status: GameStatus,
    inventory: Dict[str, int]
) -> SessionSnapshot:
    """Build a snapshot from current session state."""
    return SessionSnapshot(
        level=level,
        board=board.clone(),
        score=score,
        moves_remaining=moves_remaining,
        status=status,
        power_up_inventory=dict(inventory)
    )
