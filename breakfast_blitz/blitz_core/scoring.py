"""
Scoring System
==============

Score events and the running session total.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    source: str          # "match", or the power-up key that produced the points
    cells: int           # Number of cells that earned points
    cascade: int = 0     # Cascade pass (1-based) for match events

    def __repr__(self) -> str:
        if self.source == "match":
            return f"ScoreEvent(match pass {self.cascade}: {self.cells} cells = {self.points})"
        return f"ScoreEvent({self.source}: {self.points})"


class ScoreTracker:
    """
    Tracks the session score and the events that built it.

    Points are computed by the resolution engine and power-up executor;
    the tracker only accumulates the events they produce.
    """

    def __init__(self):
        self._score: int = 0
        self._events: List[ScoreEvent] = []

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def events(self) -> List[ScoreEvent]:
        """Scoring events since the last reset."""
        return list(self._events)

    def record(self, event: ScoreEvent) -> None:
        """Apply an event produced by the engine."""
        self._score += event.points
        self._events.append(event)

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
        self._events = []
