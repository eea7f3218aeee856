"""
Level Rewards
=============

Stars and coins for a finished level, as pure functions of score and target.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from breakfast_blitz.blitz_core.config_loader import GameConfig, get_config

DEFAULT_STAR_THRESHOLDS = (1.0, 1.5, 2.0)


@dataclass(frozen=True)
class LevelCompletion:
    """What the account layer receives when a level is won."""
    level_id: int
    score: int
    target_score: int
    stars: int
    coins: int


def calculate_stars(
    score: int,
    target_score: int,
    thresholds: Sequence[float] = DEFAULT_STAR_THRESHOLDS
) -> int:
    """
    Stars earned for a score.

    3 stars at twice the target, 2 at one and a half times, 1 at the target,
    otherwise 0 (with the default thresholds).
    """
    if target_score <= 0:
        raise ValueError(f"target_score must be positive, got {target_score}")
    ratio = score / target_score
    stars = 0
    for threshold in thresholds:
        if ratio >= threshold:
            stars += 1
    return stars


def calculate_coins(
    score: int,
    stars: int,
    coins_per_star: int = 10,
    score_per_coin: int = 1000
) -> int:
    """Coins earned: ``stars * coins_per_star + score // score_per_coin``."""
    return stars * coins_per_star + score // score_per_coin


def complete_level(
    level_id: int,
    score: int,
    target_score: int,
    config: Optional[GameConfig] = None
) -> LevelCompletion:
    """Build a LevelCompletion using the configured reward parameters."""
    if config is None:
        config = get_config()

    rewards = config.rewards
    stars = calculate_stars(score, target_score, rewards.star_thresholds)
    return LevelCompletion(
        level_id=level_id,
        score=score,
        target_score=target_score,
        stars=stars,
        coins=calculate_coins(score, stars, rewards.coins_per_star, rewards.score_per_coin)
    )
