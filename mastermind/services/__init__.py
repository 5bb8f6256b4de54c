"""
Services Package

Contains all business logic and service classes.
"""

from .evaluator import evaluate
from .game_state import apply_guess
from .leaderboard import rank, filter_by_difficulty
from .game_service import GameService, get_game_service, initialize_game_service
from .store import (
    GameStore, LeaderboardStore,
    InMemoryGameStore, InMemoryLeaderboardStore,
    MongoGameStore, MongoLeaderboardStore, connect_mongo,
)

__all__ = [
    'evaluate', 'apply_guess', 'rank', 'filter_by_difficulty',
    'GameService', 'get_game_service', 'initialize_game_service',
    'GameStore', 'LeaderboardStore',
    'InMemoryGameStore', 'InMemoryLeaderboardStore',
    'MongoGameStore', 'MongoLeaderboardStore', 'connect_mongo',
]
