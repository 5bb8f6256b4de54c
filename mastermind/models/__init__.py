"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import Game, GameStatus, GuessRecord, GuessResult, next_status
from .player import PlayerRecord

__all__ = ['Game', 'GameStatus', 'GuessRecord', 'GuessResult', 'next_status', 'PlayerRecord']
