"""
Level Catalog
=============

Level records and the world map. Levels covered by game_config.yaml are
returned as authored; every other level id up to the last world is generated
on demand and cached.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from breakfast_blitz.blitz_core.config_loader import GameConfig, LevelConfig, get_config


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"
    LEGENDARY = "legendary"


# Highest level id for each difficulty band
_DIFFICULTY_BANDS = (
    (200, Difficulty.EASY),
    (400, Difficulty.MEDIUM),
    (600, Difficulty.HARD),
    (800, Difficulty.EXPERT),
)

_OBSTACLE_COUNT = {
    Difficulty.EASY: 1,
    Difficulty.MEDIUM: 2,
    Difficulty.HARD: 3,
    Difficulty.EXPERT: 4,
    Difficulty.LEGENDARY: 5,
}

_BONUS_POWER_UPS = (("hammer", 2), ("shuffle", 1), ("extraMoves", 1))


@dataclass(frozen=True)
class LevelRewards:
    """Completion rewards granted by the account layer."""
    coins: int
    gems: Optional[int] = None
    power_ups: Tuple[Tuple[str, int], ...] = ()


@dataclass(frozen=True)
class UnlockRequirement:
    type: str   # "level" | "score" | "stars"
    value: int


@dataclass(frozen=True)
class Level:
    """
    One level definition. Immutable once created.

    The first six fields are all the match engine reads; the rest describe the
    level to the world map.
    """
    id: int
    name: str
    objective: str
    target_score: int
    moves: int
    obstacles: Tuple[str, ...] = ()
    world: str = ""
    world_id: int = 0
    difficulty: Difficulty = Difficulty.EASY
    special_features: Tuple[str, ...] = ()
    rewards: Optional[LevelRewards] = None
    unlock_requirement: Optional[UnlockRequirement] = None

    def __repr__(self) -> str:
        return f"Level({self.id}: {self.name}, target={self.target_score}, moves={self.moves})"


@dataclass(frozen=True)
class World:
    """A themed range of levels."""
    id: int
    name: str
    theme: str
    unlock_level: int
    first_level: int
    last_level: int

    def contains(self, level_id: int) -> bool:
        return self.first_level <= level_id <= self.last_level


def difficulty_for(level_id: int) -> Difficulty:
    for upper, difficulty in _DIFFICULTY_BANDS:
        if level_id <= upper:
            return difficulty
    return Difficulty.LEGENDARY


def special_features_for(level_id: int) -> Tuple[str, ...]:
    features = []
    if level_id % 10 == 0:
        features.append("boss-level")
    if level_id % 25 == 0:
        features.append("mega-rewards")
    if level_id % 50 == 0:
        features.append("world-finale")
    if level_id % 100 == 0:
        features.append("epic-challenge")
    if level_id > 500:
        features.append("legendary-difficulty")
    if level_id > 800:
        features.append("cosmic-powers")
    return tuple(features)


def rewards_for(level_id: int) -> LevelRewards:
    return LevelRewards(
        coins=math.floor(level_id * 2.5) + 50,
        gems=level_id // 10 + 5 if level_id % 10 == 0 else None,
        power_ups=_BONUS_POWER_UPS if level_id % 25 == 0 else ()
    )


class LevelCatalog:
    """
    Supplies Level records by id.

    Generated levels use a random source seeded from the catalog seed and the
    level id, so the same catalog seed always yields the same levels.
    """

    def __init__(self, config: Optional[GameConfig] = None, seed: int = 0):
        """
        Initialize catalog.

        Args:
            config: Game configuration. Uses default if None.
            seed: Seed for generated level parameters.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        per_world = config.worlds.levels_per_world
        self._worlds: Tuple[World, ...] = tuple(
            World(
                id=w.id,
                name=w.name,
                theme=w.theme,
                unlock_level=w.unlock_level,
                first_level=(w.id - 1) * per_world + 1,
                last_level=w.id * per_world
            )
            for w in config.worlds.entries
        )
        self._authored: Dict[int, LevelConfig] = {level.id: level for level in config.levels}
        self._cache: Dict[int, Level] = {}

    @property
    def worlds(self) -> Tuple[World, ...]:
        return self._worlds

    @property
    def max_level_id(self) -> int:
        """Highest level id available, authored or generated."""
        return max(self._config.worlds.max_level_id, len(self._authored))

    def __len__(self) -> int:
        return self.max_level_id

    def get_world(self, world_id: int) -> Optional[World]:
        if 1 <= world_id <= len(self._worlds):
            return self._worlds[world_id - 1]
        return None

    def world_for_level(self, level_id: int) -> Optional[World]:
        for world in self._worlds:
            if world.contains(level_id):
                return world
        return None

    def get_level(self, level_id: int) -> Optional[Level]:
        """
        Get a level by id.

        Returns:
            The Level, or None if the id is outside the catalog.
        """
        if level_id < 1 or level_id > self.max_level_id:
            return None
        level = self._cache.get(level_id)
        if level is None:
            if level_id in self._authored:
                level = self._from_config(self._authored[level_id])
            else:
                level = self.generate_level(level_id)
            self._cache[level_id] = level
        return level

    def _from_config(self, level_config: LevelConfig) -> Level:
        world = self.world_for_level(level_config.id)
        return Level(
            id=level_config.id,
            name=level_config.name,
            objective=level_config.objective,
            target_score=level_config.target_score,
            moves=level_config.moves,
            obstacles=level_config.obstacles,
            world=world.name if world else "",
            world_id=world.id if world else 0,
            difficulty=difficulty_for(level_config.id),
            special_features=special_features_for(level_config.id),
            rewards=rewards_for(level_config.id),
            unlock_requirement=self._unlock_requirement(level_config.id)
        )

    def generate_level(self, level_id: int) -> Level:
        """
        Build a procedural level for ``level_id``.

        Raises:
            ValueError: If no world covers the id.
        """
        world = self.world_for_level(level_id)
        if world is None:
            raise ValueError(f"No world contains level {level_id}")

        rng = random.Random(self._seed * 1_000_003 + level_id)
        difficulty = difficulty_for(level_id)
        obstacle_pool = self._config.worlds.level_obstacles

        return Level(
            id=level_id,
            name=f"{world.name} - Stage {level_id - world.first_level + 1}",
            objective=self._objective(level_id, world, rng),
            target_score=level_id * 150 + rng.randrange(300),
            moves=max(10, 25 - level_id // 100) + rng.randrange(5),
            obstacles=tuple(obstacle_pool[:_OBSTACLE_COUNT[difficulty]]),
            world=world.name,
            world_id=world.id,
            difficulty=difficulty,
            special_features=special_features_for(level_id),
            rewards=rewards_for(level_id),
            unlock_requirement=self._unlock_requirement(level_id)
        )

    @staticmethod
    def _objective(level_id: int, world: World, rng: random.Random) -> str:
        first_word = world.name.split(" ")[0].lower()
        objectives = (
            f"Score {level_id * 100 + rng.randrange(500)} points",
            f"Collect {level_id // 10 + 5} {first_word} pieces",
            f"Clear all obstacles in {level_id // 20 + 15} moves",
            f"Create {level_id // 50 + 2} special combos",
            "Reach the bottom of the board",
            f"Collect ingredients for the perfect {first_word}",
        )
        return objectives[level_id % len(objectives)]

    @staticmethod
    def _unlock_requirement(level_id: int) -> Optional[UnlockRequirement]:
        if level_id > 1:
            return UnlockRequirement(type="level", value=level_id - 1)
        return None

    def get_world_levels(self, world_id: int) -> List[Level]:
        world = self.get_world(world_id)
        if world is None:
            return []
        return [self.get_level(i) for i in range(world.first_level, world.last_level + 1)]

    def is_level_unlocked(self, level_id: int, player_level: int) -> bool:
        """
        Whether a player at ``player_level`` may start ``level_id``.

        Only "level" requirements gate; other requirement kinds pass.
        """
        if level_id == 1:
            return True
        level = self.get_level(level_id)
        if level is None:
            return False
        requirement = level.unlock_requirement
        if requirement is None:
            return True
        if requirement.type == "level":
            return player_level >= requirement.value
        return True

    def get_next_level(self, level_id: int) -> Optional[Level]:
        if level_id >= self.max_level_id:
            return None
        return self.get_level(level_id + 1)
