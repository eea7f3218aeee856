"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from breakfast_blitz.blitz_core.pieces import PieceType


@dataclass(frozen=True)
class BoardConfig:
    """Board geometry and generation settings."""
    size: int                    # Square grid edge length
    obstacle_chance: float       # Per-cell obstacle probability when seeding obstacles
    obstacles_in_refill: bool    # Whether refill after gravity may spawn obstacles


@dataclass(frozen=True)
class ObstacleConfig:
    """Configuration for a single obstacle piece kind."""
    name: str
    health: int
    timer: Optional[int] = None
    sticky: bool = False


@dataclass(frozen=True)
class ScoringConfig:
    """Point awards."""
    match_points: int
    hammer_points: int
    color_bomb_points: int
    bacon_bomb_points: int
    maple_syrup_points: int


@dataclass(frozen=True)
class PowerUpConfig:
    """Power-up tuning and starting inventory."""
    extra_moves_bonus: int
    coffee_boost_bonus: int
    starting_inventory: Tuple[Tuple[str, int], ...]

    def inventory_dict(self) -> Dict[str, int]:
        """Starting inventory as a fresh mutable dict."""
        return dict(self.starting_inventory)


@dataclass(frozen=True)
class RulesConfig:
    """Move validation rules."""
    require_adjacent: bool


@dataclass(frozen=True)
class RewardsConfig:
    """Level completion reward parameters."""
    star_thresholds: Tuple[float, float, float]
    coins_per_star: int
    score_per_coin: int


@dataclass(frozen=True)
class LevelConfig:
    """A hand-authored level."""
    id: int
    name: str
    objective: str
    target_score: int
    moves: int
    obstacles: Tuple[str, ...]


@dataclass(frozen=True)
class WorldConfig:
    """A world grouping a contiguous range of levels."""
    id: int
    name: str
    theme: str
    unlock_level: int


@dataclass(frozen=True)
class WorldsConfig:
    """World map layout."""
    levels_per_world: int
    entries: Tuple[WorldConfig, ...]
    level_obstacles: Tuple[str, ...]

    @property
    def max_level_id(self) -> int:
        return self.levels_per_world * len(self.entries)


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    pieces: Tuple[str, ...]
    obstacles: Tuple[ObstacleConfig, ...]
    scoring: ScoringConfig
    power_ups: PowerUpConfig
    rules: RulesConfig
    rewards: RewardsConfig
    levels: Tuple[LevelConfig, ...]
    worlds: WorldsConfig

    @property
    def num_piece_kinds(self) -> int:
        """Number of normal (spawnable) piece kinds."""
        return len(self.pieces)

    def get_obstacle(self, name: str) -> ObstacleConfig:
        """Get obstacle config by piece type name."""
        for obstacle in self.obstacles:
            if obstacle.name == name:
                return obstacle
        raise ValueError(f"Unknown obstacle kind: {name}")


def _parse_obstacle(obstacle_data: dict) -> ObstacleConfig:
    """Parse a single obstacle entry from YAML."""
    timer = obstacle_data.get("timer")
    return ObstacleConfig(
        name=str(obstacle_data["name"]),
        health=int(obstacle_data.get("health", 1)),
        timer=int(timer) if timer is not None else None,
        sticky=bool(obstacle_data.get("sticky", False))
    )


def _parse_level(level_data: dict) -> LevelConfig:
    """Parse a single level entry from YAML."""
    return LevelConfig(
        id=int(level_data["id"]),
        name=str(level_data["name"]),
        objective=str(level_data.get("objective", "")),
        target_score=int(level_data["target_score"]),
        moves=int(level_data["moves"]),
        obstacles=tuple(str(o) for o in level_data.get("obstacles") or [])
    )


def _parse_thresholds(data: List) -> Tuple[float, float, float]:
    """Parse the three star thresholds."""
    if len(data) != 3:
        raise ValueError(f"star_thresholds must have 3 values, got {data}")
    return (float(data[0]), float(data[1]), float(data[2]))


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.board.size < 3:
        raise ValueError(f"board.size must be at least 3, got {config.board.size}")

    if not 0.0 <= config.board.obstacle_chance <= 1.0:
        raise ValueError(
            f"board.obstacle_chance must be in [0, 1], got {config.board.obstacle_chance}"
        )

    if not config.pieces:
        raise ValueError("At least one normal piece kind is required")

    # Every name must map onto a known piece type
    known = {t.value for t in PieceType}
    for name in list(config.pieces) + [o.name for o in config.obstacles]:
        if name not in known:
            raise ValueError(f"Unknown piece type in config: {name}")

    for obstacle in config.obstacles:
        if obstacle.health < 1:
            raise ValueError(f"Obstacle {obstacle.name} health must be >= 1")

    for key, count in config.power_ups.starting_inventory:
        if count < 0:
            raise ValueError(f"Starting inventory for {key} must be >= 0, got {count}")

    low, mid, high = config.rewards.star_thresholds
    if not low <= mid <= high:
        raise ValueError(f"star_thresholds must be ascending, got {config.rewards.star_thresholds}")

    # Validate level IDs are sequential
    for i, level in enumerate(config.levels):
        if level.id != i + 1:
            raise ValueError(f"Level ID mismatch: expected {i + 1}, got {level.id}")

    for i, world in enumerate(config.worlds.entries):
        if world.id != i + 1:
            raise ValueError(f"World ID mismatch: expected {i + 1}, got {world.id}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        size=int(board_data["size"]),
        obstacle_chance=float(board_data.get("obstacle_chance", 0.1)),
        obstacles_in_refill=bool(board_data.get("obstacles_in_refill", False))
    )

    pieces = tuple(str(p) for p in raw["pieces"])
    obstacles = tuple(_parse_obstacle(o) for o in raw.get("obstacles") or [])

    scoring_data = raw["scoring"]
    scoring = ScoringConfig(
        match_points=int(scoring_data["match_points"]),
        hammer_points=int(scoring_data.get("hammer_points", 100)),
        color_bomb_points=int(scoring_data.get("color_bomb_points", 50)),
        bacon_bomb_points=int(scoring_data.get("bacon_bomb_points", 75)),
        maple_syrup_points=int(scoring_data.get("maple_syrup_points", 30))
    )

    power_data = raw["power_ups"]
    power_ups = PowerUpConfig(
        extra_moves_bonus=int(power_data.get("extra_moves_bonus", 5)),
        coffee_boost_bonus=int(power_data.get("coffee_boost_bonus", 3)),
        starting_inventory=tuple(
            (str(k), int(v)) for k, v in (power_data.get("starting_inventory") or {}).items()
        )
    )

    rules_data = raw.get("rules", {})
    rules = RulesConfig(
        require_adjacent=bool(rules_data.get("require_adjacent", True))
    )

    rewards_data = raw.get("rewards", {})
    rewards = RewardsConfig(
        star_thresholds=_parse_thresholds(rewards_data.get("star_thresholds", [1.0, 1.5, 2.0])),
        coins_per_star=int(rewards_data.get("coins_per_star", 10)),
        score_per_coin=int(rewards_data.get("score_per_coin", 1000))
    )

    levels = tuple(_parse_level(level) for level in raw.get("levels") or [])

    worlds_data = raw.get("worlds", {})
    worlds = WorldsConfig(
        levels_per_world=int(worlds_data.get("levels_per_world", 50)),
        entries=tuple(
            WorldConfig(
                id=int(w["id"]),
                name=str(w["name"]),
                theme=str(w.get("theme", "")),
                unlock_level=int(w.get("unlock_level", 1))
            )
            for w in worlds_data.get("entries") or []
        ),
        level_obstacles=tuple(str(o) for o in worlds_data.get("level_obstacles") or [])
    )

    config = GameConfig(
        board=board,
        pieces=pieces,
        obstacles=obstacles,
        scoring=scoring,
        power_ups=power_ups,
        rules=rules,
        rewards=rewards,
        levels=levels,
        worlds=worlds
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
