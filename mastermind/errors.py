"""
Game Errors

Exception hierarchy raised by the game core and services. Each error carries
a stable ``code`` and the HTTP status the controllers answer with.
"""

from typing import Any, Dict


class MastermindError(Exception):
    """Base class for all game errors."""

    code = 'mastermind_error'
    status_code = 500

    def __init__(self, message: str = None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': False,
            'error': self.message,
            'code': self.code
        }


class InvalidInput(MastermindError):
    """Invalid input"""
    code = 'invalid_input'
    status_code = 400


class InvalidGuessLength(InvalidInput):
    """Guess length does not match the secret code length"""
    code = 'invalid_guess_length'


class InvalidDifficulty(InvalidInput):
    """Unknown difficulty"""
    code = 'invalid_difficulty'


class GameAlreadyEnded(MastermindError):
    """Game has already ended"""
    code = 'game_already_ended'
    status_code = 409


class GameNotFound(MastermindError):
    """Game not found"""
    code = 'game_not_found'
    status_code = 404


class ConcurrentGuessError(MastermindError):
    """Another guess was recorded for this game first"""
    code = 'concurrent_guess'
    status_code = 409
