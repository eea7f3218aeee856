"""
Game Session
============

Main session orchestrator combining board generation, swap resolution,
power-ups, scoring and rules.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

from breakfast_blitz.blitz_core.board import Board, generate_board
from breakfast_blitz.blitz_core.config_loader import GameConfig, get_config
from breakfast_blitz.blitz_core.level_catalog import Level, LevelCatalog
from breakfast_blitz.blitz_core.power_ups import (
    PowerUpExecutor,
    PowerUpInventory,
    PowerUpKey,
    PowerUpResult,
)
from breakfast_blitz.blitz_core.resolution import MoveResult, ResolutionEngine
from breakfast_blitz.blitz_core.rewards import LevelCompletion, complete_level
from breakfast_blitz.blitz_core.rng import PieceGenerator
from breakfast_blitz.blitz_core.rules import GameRules, GameStatus
from breakfast_blitz.blitz_core.scoring import ScoreTracker
from breakfast_blitz.blitz_core.state_snapshot import SessionSnapshot, build_snapshot


class GameSession:
    """
    State of one level attempt.

    Orchestrates:
    - Board generation
    - Swap resolution (ResolutionEngine)
    - Power-ups (PowerUpExecutor) and their inventory
    - Scoring
    - Win/loss rules

    Not thread-safe: callers must serialize calls to the mutating methods.
    Every mutating method commits board, score, moves and status together,
    or changes nothing.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        level: Optional[Level] = None,
        inventory: Optional[Mapping[str, int]] = None,
        generator: Optional[PieceGenerator] = None,
        catalog: Optional[LevelCatalog] = None,
        with_obstacles: bool = False,
        debug: bool = False
    ):
        """
        Initialize session and load the first level.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for the piece generator. Ignored if ``generator`` is given.
            level: Level to start. Level 1 from the catalog if None.
            inventory: Starting power-up counts. Configured counts if None.
            generator: Random source. A PieceGenerator seeded with ``seed`` if None.
            catalog: Level catalog used to resolve the default level.
            with_obstacles: Seed obstacle pieces into generated boards.
            debug: If True, print state transitions.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._debug = debug
        self._with_obstacles = with_obstacles

        # Subsystems
        self._generator = generator or PieceGenerator(config, seed)
        self._catalog = catalog or LevelCatalog(config)
        self._engine = ResolutionEngine(self._generator, config)
        self._executor = PowerUpExecutor(self._generator, config)
        self._scorer = ScoreTracker()
        self._rules = GameRules(config)
        self._inventory = PowerUpInventory(
            inventory if inventory is not None else config.power_ups.inventory_dict()
        )

        # Session state, populated by initialize_level
        self._level: Level
        self._board: Board
        self._moves_remaining: int
        self._status: GameStatus

        self.initialize_level(level or self._catalog.get_level(1))

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def generator(self) -> PieceGenerator:
        return self._generator

    @property
    def current_level(self) -> Level:
        return self._level

    @property
    def board(self) -> Board:
        """
        Copy of the current board.

        Editing the copy does not affect the session; only make_move and
        use_power_up change the live board.
        """
        return self._board.clone()

    @property
    def score(self) -> int:
        return self._scorer.score

    @property
    def moves_remaining(self) -> int:
        return self._moves_remaining

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        """True if the level has been won or lost."""
        return self._status.is_terminal

    @property
    def inventory(self) -> PowerUpInventory:
        """Copy of the power-up inventory."""
        return self._inventory.copy()

    @property
    def scorer(self) -> ScoreTracker:
        return self._scorer

    def snapshot(self) -> SessionSnapshot:
        """Immutable copy of the session state."""
        return build_snapshot(
            level=self._level,
            board=self._board,
            score=self._scorer.score,
            moves_remaining=self._moves_remaining,
            status=self._status,
            inventory=self._inventory.as_dict()
        )

    def initialize_level(self, level: Level) -> SessionSnapshot:
        """
        Start a fresh attempt at ``level``.

        Generates a new board, zeroes the score and restores the level's move
        allowance. The power-up inventory carries over.
        """
        self._level = level
        self._board = generate_board(
            self._config.board.size,
            self._generator,
            with_obstacles=self._with_obstacles
        )
        self._scorer.reset()
        self._moves_remaining = level.moves
        self._status = GameStatus.PLAYING

        if self._debug:
            print(f"[DEBUG] Level {level.id} '{level.name}': "
                  f"target={level.target_score}, moves={level.moves}")
        return self.snapshot()

    def reset_game(self) -> SessionSnapshot:
        """Restart the current level."""
        return self.initialize_level(self._level)

    def pause_game(self) -> None:
        if self._status is GameStatus.PLAYING:
            self._status = GameStatus.PAUSED

    def resume_game(self) -> None:
        if self._status is GameStatus.PAUSED:
            self._status = GameStatus.PLAYING

    def make_move(self, from_row: int, from_col: int, to_row: int, to_col: int) -> MoveResult:
        """
        Swap two cells and resolve the resulting cascade.

        A swap that forms no run changes nothing and costs no move.

        Raises:
            InvalidCoordinate: If either cell is off the board.
            NonAdjacentSwap: If adjacency is required and the cells don't touch.
        """
        source, destination = self._rules.swap.validate(
            self._board, from_row, from_col, to_row, to_col
        )

        if self._status is not GameStatus.PLAYING:
            return self._stamp(MoveResult.rejected(self._board, (source, destination), "not_playing"))
        if self._moves_remaining <= 0:
            return self._stamp(MoveResult.rejected(self._board, (source, destination), "no_moves"))

        result = self._engine.resolve_swap(self._board, source, destination)
        if not result.matched:
            if self._debug:
                print(f"[DEBUG] Swap {tuple(source)}<->{tuple(destination)}: no match")
            return self._stamp(result)

        # Commit
        self._board = result.board
        for event in result.events:
            self._scorer.record(event)
        self._moves_remaining -= 1

        termination = self._rules.termination.check_termination(
            score=self._scorer.score,
            target_score=self._level.target_score,
            moves_remaining=self._moves_remaining
        )
        self._status = termination.status

        if self._debug:
            print(f"[DEBUG] Swap {tuple(source)}<->{tuple(destination)}: "
                  f"+{result.score_delta} over {result.cascades} pass(es), "
                  f"score={self._scorer.score}, moves={self._moves_remaining}")
            if self._status.is_terminal:
                print(f"[DEBUG] {self._status.value.upper()}: {termination.reason}")

        return self._stamp(result)

    def use_power_up(
        self,
        key: Union[str, PowerUpKey],
        row: Optional[int] = None,
        col: Optional[int] = None
    ) -> PowerUpResult:
        """
        Activate a power-up from the inventory.

        Refused without any state change when none are left or the session is
        not playing. Power-ups never cost a move; reaching the target score
        with one wins the level.

        Raises:
            UnknownPowerUp: If ``key`` is not a power-up.
            InvalidCoordinate: If a targeted power-up has no valid target.
        """
        key = PowerUpKey.parse(key)

        if self._status is not GameStatus.PLAYING:
            return self._stamp(PowerUpResult.refused(key, self._board, "not_playing"))
        if not self._inventory.can_use(key):
            return self._stamp(PowerUpResult.refused(key, self._board, "empty_inventory"))

        result = self._executor.apply(self._board, key, row, col)

        # Commit
        self._inventory.consume(key)
        self._board = result.board
        self._moves_remaining += result.moves_added
        for event in result.events:
            self._scorer.record(event)

        termination = self._rules.termination.check_win(
            score=self._scorer.score,
            target_score=self._level.target_score
        )
        self._status = termination.status

        if self._debug:
            print(f"[DEBUG] Power-up {key.value}: +{result.score_delta} points, "
                  f"+{result.moves_added} moves, {len(result.affected)} cells, "
                  f"{self._inventory.count(key)} left")
            if self._status.is_terminal:
                print(f"[DEBUG] {self._status.value.upper()}: {termination.reason}")

        return self._stamp(result)

    def _stamp(self, result):
        # Results carry a private copy so callers never hold the live board
        result.board = self._board.clone()
        result.status = self._status.value
        if isinstance(result, MoveResult):
            result.moves_remaining = self._moves_remaining
        return result

    def level_result(self) -> Optional[LevelCompletion]:
        """Stars and coins for a won level; None while not won."""
        if self._status is not GameStatus.WON:
            return None
        return complete_level(
            self._level.id,
            self._scorer.score,
            self._level.target_score,
            self._config
        )
