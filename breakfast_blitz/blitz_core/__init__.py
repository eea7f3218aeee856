"""
Blitz Core - The match-resolution engine.

This module provides the pure state-transition logic of the game and a
Gymnasium environment wrapper around it.

Main exports:
- GameSession: One level attempt (make_move, use_power_up, pause/resume/reset)
- BlitzEnv: Gymnasium environment over a session
- Board, generate_board: Grid of pieces and the board generator
- find_matches, find_runs: Match detection
- ResolutionEngine, PowerUpExecutor: Swap and power-up resolution
- LevelCatalog: Levels and worlds
- GameConfig: Configuration loaded from game_config.yaml
"""

from breakfast_blitz.blitz_core.config_loader import GameConfig, load_config
from breakfast_blitz.blitz_core.pieces import Piece, PieceType, SpecialKind
from breakfast_blitz.blitz_core.rng import PieceGenerator
from breakfast_blitz.blitz_core.board import Board, Coordinate, generate_board
from breakfast_blitz.blitz_core.match_detector import find_matches, find_runs
from breakfast_blitz.blitz_core.resolution import MoveResult, ResolutionEngine
from breakfast_blitz.blitz_core.power_ups import (
    PowerUpExecutor,
    PowerUpInventory,
    PowerUpKey,
    PowerUpResult,
)
from breakfast_blitz.blitz_core.rules import GameStatus
from breakfast_blitz.blitz_core.level_catalog import Level, LevelCatalog
from breakfast_blitz.blitz_core.rewards import LevelCompletion, calculate_coins, calculate_stars
from breakfast_blitz.blitz_core.session import GameSession
from breakfast_blitz.blitz_core.state_snapshot import SessionSnapshot
from breakfast_blitz.blitz_core.env_gym import BlitzEnv
from breakfast_blitz.blitz_core.exceptions import (
    InvalidCoordinate,
    NonAdjacentSwap,
    UnknownPowerUp,
)

__all__ = [
    "GameConfig",
    "load_config",
    "Piece",
    "PieceType",
    "SpecialKind",
    "PieceGenerator",
    "Board",
    "Coordinate",
    "generate_board",
    "find_matches",
    "find_runs",
    "MoveResult",
    "ResolutionEngine",
    "PowerUpExecutor",
    "PowerUpInventory",
    "PowerUpKey",
    "PowerUpResult",
    "GameStatus",
    "Level",
    "LevelCatalog",
    "LevelCompletion",
    "calculate_coins",
    "calculate_stars",
    "GameSession",
    "SessionSnapshot",
    "BlitzEnv",
    "InvalidCoordinate",
    "NonAdjacentSwap",
    "UnknownPowerUp",
]
