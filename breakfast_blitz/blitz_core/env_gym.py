"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to a Breakfast Blitz session.
Reward is always 0.0 - agents compute their own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from breakfast_blitz.blitz_core.board import adjacent_swaps
from breakfast_blitz.blitz_core.config_loader import GameConfig, load_config
from breakfast_blitz.blitz_core.level_catalog import Level, LevelCatalog
from breakfast_blitz.blitz_core.match_detector import has_match
from breakfast_blitz.blitz_core.pieces import PieceType
from breakfast_blitz.blitz_core.power_ups import PowerUpKey
from breakfast_blitz.blitz_core.rules import GameStatus
from breakfast_blitz.blitz_core.session import GameSession

MAX_MOVES = 10_000


class BlitzEnv(gym.Env):
    """
    Breakfast Blitz match-3 level as a Gymnasium environment.

    Action Space:
        Discrete(2 * size * (size - 1))
        Index into every adjacent swap: horizontal pairs row-major first,
        then vertical pairs.

    Observation Space:
        Dict with the board as piece-type codes plus score, target, moves,
        status code and power-up counts.

    Reward:
        Always 0.0. Use info["delta_score"].

    Info:
        Contains score, delta_score, moves_remaining, status, matched, cascades.
    """

    metadata = {
        "render_modes": ["ansi"],
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        level_id: int = 1,
        with_obstacles: bool = False,
        render_mode: Optional[str] = None,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            level_id: Level played every episode.
            with_obstacles: Seed obstacle pieces into generated boards.
            render_mode: "ansi" for a text board, None for headless.
            debug: If True, enables verbose debug output.
        """
        super().__init__()

        self._config: GameConfig = load_config(config_path)
        self._catalog = LevelCatalog(self._config)
        level = self._catalog.get_level(level_id)
        if level is None:
            raise ValueError(f"Unknown level id: {level_id}")
        self._level: Level = level
        self._with_obstacles = with_obstacles
        self._debug = debug
        self.render_mode = render_mode

        self._size = self._config.board.size
        self._swaps = adjacent_swaps(self._size)
        self._session = self._new_session(seed=None)

        self.action_space = spaces.Discrete(len(self._swaps))
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] BlitzEnv initialized")
            print(f"[DEBUG]   Board: {self._size}x{self._size}")
            print(f"[DEBUG]   Level: {self._level}")
            print(f"[DEBUG]   Actions: {len(self._swaps)}")

    def _new_session(self, seed: Optional[int]) -> GameSession:
        return GameSession(
            config=self._config,
            seed=seed,
            level=self._level,
            catalog=self._catalog,
            with_obstacles=self._with_obstacles,
            debug=self._debug
        )

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        return spaces.Dict({
            "board": spaces.Box(
                low=0, high=len(PieceType) - 1,
                shape=(self._size, self._size), dtype=np.int8
            ),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "target_score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "moves_remaining": spaces.Box(low=0, high=MAX_MOVES, shape=(), dtype=np.int32),
            "status": spaces.Box(low=0, high=len(GameStatus) - 1, shape=(), dtype=np.int32),
            "inventory": spaces.Box(low=0, high=MAX_MOVES, shape=(len(PowerUpKey),), dtype=np.int32),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        # Derive the board seed from the env RNG so unseeded resets stay reproducible
        board_seed = seed if seed is not None else int(self.np_random.integers(0, 2**31 - 1))
        self._session = self._new_session(seed=board_seed)

        obs = self._session.snapshot().to_obs_dict()
        info = self._get_info()
        info["delta_score"] = 0
        return obs, info

    def step(
        self,
        action: Union[int, np.integer, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one swap.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())
        action = int(action)
        if not 0 <= action < len(self._swaps):
            raise ValueError(f"Action {action} outside [0, {len(self._swaps)})")

        source, destination = self._swaps[action]
        result = self._session.make_move(source.row, source.col, destination.row, destination.col)

        obs = self._session.snapshot().to_obs_dict()
        info = self._get_info()
        info["delta_score"] = result.score_delta
        info["matched"] = result.matched
        info["cascades"] = result.cascades

        if self._debug:
            print(f"[DEBUG] Step: action={action}, matched={result.matched}, "
                  f"delta_score={result.score_delta}, moves={self._session.moves_remaining}")

        return obs, 0.0, self._session.is_over, False, info

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self._session.score,
            "moves_remaining": self._session.moves_remaining,
            "status": self._session.status.value,
            "level_id": self._level.id,
        }

    def valid_action_mask(self) -> np.ndarray:
        """Boolean mask of swaps that would form at least one run."""
        board = self._session.board
        mask = np.zeros(len(self._swaps), dtype=bool)
        for i, (source, destination) in enumerate(self._swaps):
            candidate = board.clone()
            candidate.swap(source, destination)
            mask[i] = has_match(candidate)
        return mask

    def render(self) -> Optional[str]:
        """Text board when render_mode is "ansi"."""
        if self.render_mode == "ansi":
            snapshot = self._session.snapshot()
            header = (f"score={snapshot.score}/{snapshot.target_score} "
                      f"moves={snapshot.moves_remaining} status={snapshot.status.value}")
            return f"{header}\n{snapshot.board}"
        return None

    @property
    def session(self) -> GameSession:
        """Access to underlying session (for debugging/tools)."""
        return self._session

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
