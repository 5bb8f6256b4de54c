"""
Game Service

Contains the game lifecycle around the scoring core: secret generation,
guess validation, conditional persistence and leaderboard updates.
"""

import random
import uuid
from typing import Dict, List, Optional

from ..config.game_settings import (
    DEFAULT_DIFFICULTY, DIFFICULTY_SETTINGS, MAX_ATTEMPTS, get_difficulty_settings,
)
from ..errors import (
    GameAlreadyEnded, GameNotFound, InvalidDifficulty, InvalidInput, InvalidGuessLength,
)
from ..models.game import Game, GameStatus, GuessResult
from ..models.player import PlayerRecord
from .game_state import apply_guess
from .leaderboard import rank
from .store import GameStore, LeaderboardStore


class GameService:
    """
    Core game service managing game sessions.

    This class handles:
    - Game creation with a secret code the client never sees mid-game
    - Guess validation and evaluation
    - Optimistic persistence of each attempt
    - Leaderboard bookkeeping when a game ends
    """

    def __init__(self,
                 game_store: GameStore,
                 leaderboard_store: LeaderboardStore,
                 rng: Optional[random.Random] = None,
                 max_attempts: int = MAX_ATTEMPTS):
        self.game_store = game_store
        self.leaderboard_store = leaderboard_store
        self.rng = rng or random.SystemRandom()
        self.max_attempts = max_attempts

    def create_new_game(self, user_id: str, difficulty: Optional[str] = None) -> Game:
        """
        Creates a new game with a randomly generated secret code.

        Args:
            user_id: Owner of the game
            difficulty: Tier name, defaults to DEFAULT_DIFFICULTY

        Returns:
            The persisted Game

        Raises:
            InvalidDifficulty: If the tier is unknown
        """
        difficulty = difficulty or DEFAULT_DIFFICULTY
        if difficulty not in DIFFICULTY_SETTINGS:
            raise InvalidDifficulty(
                f"Invalid difficulty '{difficulty}'. Must be one of: "
                f"{', '.join(DIFFICULTY_SETTINGS)}"
            )

        settings = get_difficulty_settings(difficulty)
        secret_code = tuple(
            self.rng.choice(settings['colors']) for _ in range(settings['code_length'])
        )

        game = Game(
            game_id=str(uuid.uuid4()),
            user_id=user_id,
            difficulty=difficulty,
            secret_code=secret_code,
            max_attempts=self.max_attempts,
        )
        self.game_store.create(game)
        return game

    def get_game(self, game_id: str, user_id: str) -> Game:
        game = self.game_store.get(game_id, user_id)
        if game is None:
            raise GameNotFound(f"Game {game_id} not found")
        return game

    def get_game_state(self, game_id: str, user_id: str) -> Dict:
        """Returns the client view of a game (without the answer while playing)."""
        return self.get_game(game_id, user_id).to_public_dict()

    def list_games(self, user_id: str, difficulty: Optional[str] = None,
                   limit: Optional[int] = None) -> List[Dict]:
        games = self.game_store.list_for_user(user_id, difficulty=difficulty, limit=limit)
        return [game.to_public_dict() for game in games]

    def validate_guess(self, game: Game, guess) -> List[str]:
        """
        Validates and normalizes a raw guess for a specific game.

        Args:
            game: The game being played
            guess: Raw guess from the client

        Returns:
            The guess as a list of lowercase peg colors

        Raises:
            InvalidInput: If the guess is not a list of known colors
            InvalidGuessLength: If the guess has the wrong number of pegs
        """
        if not isinstance(guess, (list, tuple)) or not guess:
            raise InvalidInput("Guess must be a non-empty list of colors")
        if not all(isinstance(peg, str) for peg in guess):
            raise InvalidInput("Guess must contain only color names")

        normalized = [peg.strip().lower() for peg in guess]
        if len(normalized) != game.code_length:
            raise InvalidGuessLength(
                f"Guess must have {game.code_length} pegs, got {len(normalized)}"
            )

        colors = get_difficulty_settings(game.difficulty)['colors']
        unknown = [peg for peg in normalized if peg not in colors]
        if unknown:
            raise InvalidInput(f"Unknown colors for {game.difficulty}: {', '.join(unknown)}")

        return normalized

    def submit_guess(self, game_id: str, user_id: str, guess,
                     username: Optional[str] = None) -> GuessResult:
        """
        Processes a guess and persists the updated game.

        Args:
            game_id: Unique game identifier
            user_id: Owner of the game
            guess: Raw guess from the client
            username: Display name stored on the leaderboard

        Returns:
            GuessResult for the attempt

        Raises:
            GameNotFound, InvalidInput, GameAlreadyEnded, ConcurrentGuessError
        """
        game = self.get_game(game_id, user_id)
        # status is checked before the guess itself
        if game.status.is_terminal:
            raise GameAlreadyEnded(f"Game is already {game.status.value}")
        normalized = self.validate_guess(game, guess)

        updated, result = apply_guess(game, normalized)
        self.game_store.save_guess(updated, expected_total_guesses=game.total_guesses)

        if updated.status.is_terminal:
            self.leaderboard_store.record_result(
                user_id,
                updated.difficulty,
                won=result.game_status is GameStatus.WON,
                guesses_used=result.guess_number,
                username=username,
            )

        return result

    def delete_game(self, game_id: str, user_id: str) -> bool:
        """
        Removes a game record.

        Returns:
            bool: True if game was deleted, False if not found
        """
        return self.game_store.delete(game_id, user_id)

    def get_leaderboard(self, difficulty: Optional[str] = None,
                        limit: Optional[int] = None) -> List[PlayerRecord]:
        if difficulty is not None and difficulty not in DIFFICULTY_SETTINGS:
            raise InvalidDifficulty(f"Invalid difficulty '{difficulty}'")
        ranked = rank(self.leaderboard_store.all(difficulty), difficulty)
        return ranked[:limit] if limit is not None else ranked


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(game_store: GameStore,
                            leaderboard_store: LeaderboardStore,
                            **kwargs) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(game_store, leaderboard_store, **kwargs)
    return _game_service
