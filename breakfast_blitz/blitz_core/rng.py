"""
RNG - Piece Generator
=====================

Single seedable source of randomness for the engine: piece spawning,
obstacle rolls, identity tokens and shuffles.
"""

from __future__ import annotations

import random
import string
from typing import List, MutableSequence, Optional, TypeVar

from breakfast_blitz.blitz_core.config_loader import GameConfig, get_config
from breakfast_blitz.blitz_core.pieces import Piece, PieceType, SpecialKind

T = TypeVar("T")

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 9


class PieceGenerator:
    """
    Spawns fresh pieces.

    Normal kinds are drawn uniformly from the configured piece list. Obstacle
    kinds are substituted with probability ``board.obstacle_chance`` when an
    obstacle roll is requested.

    Swap in a seeded instance (or a subclass) for deterministic tests.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize generator.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._rng = random.Random(seed)
        self._normal_types: List[PieceType] = [PieceType(name) for name in config.pieces]
        self._obstacle_types: List[PieceType] = [PieceType(o.name) for o in config.obstacles]

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def normal_types(self) -> List[PieceType]:
        """Piece kinds that refill and generation draw from."""
        return list(self._normal_types)

    def new_id(self) -> str:
        """Random identity token for a spawned piece."""
        return "".join(self._rng.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))

    def _choose_normal_type(self) -> PieceType:
        return self._rng.choice(self._normal_types)

    def _choose_obstacle_type(self) -> PieceType:
        return self._rng.choice(self._obstacle_types)

    def normal_piece(self) -> Piece:
        """Fresh normal piece with no special tag."""
        return Piece(type=self._choose_normal_type(), id=self.new_id())

    def obstacle_piece(self, kind: Optional[PieceType] = None) -> Piece:
        """
        Fresh obstacle piece carrying its configured health, timer and sticky flag.

        Args:
            kind: Obstacle kind. Random obstacle kind if None.
        """
        if kind is None:
            kind = self._choose_obstacle_type()
        obstacle = self._config.get_obstacle(kind.value)
        return Piece(
            type=kind,
            id=self.new_id(),
            special=SpecialKind.NONE,
            health=obstacle.health,
            timer=obstacle.timer,
            sticky=obstacle.sticky
        )

    def spawn(self, with_obstacles: bool = False) -> Piece:
        """
        Spawn one piece for a board cell.

        Args:
            with_obstacles: Roll the obstacle chance before drawing a normal kind.
        """
        if (
            with_obstacles
            and self._obstacle_types
            and self._rng.random() < self._config.board.obstacle_chance
        ):
            return self.obstacle_piece()
        return self.normal_piece()

    def refill_piece(self) -> Piece:
        """Piece dropped into a cell vacated by gravity."""
        return self.spawn(with_obstacles=self._config.board.obstacles_in_refill)

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Uniform in-place permutation (Fisher-Yates)."""
        for i in range(len(items) - 1, 0, -1):
            j = self._rng.randint(0, i)
            items[i], items[j] = items[j], items[i]

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the generator with optional new seed.

        Args:
            seed: New random seed. Keeps current if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)
