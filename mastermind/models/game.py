"""
Game Data Models

Contains all game-related data structures, the game status state machine and
their record/wire serialization.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..config.game_settings import DEFAULT_DIFFICULTY, MAX_ATTEMPTS
from ..errors import GameAlreadyEnded


class GameStatus(Enum):
    """Game status. PLAYING is initial, WON and LOST are terminal."""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.PLAYING


def next_status(current: GameStatus,
                exact_matches: int,
                code_length: int,
                guess_number: int,
                max_attempts: int = MAX_ATTEMPTS) -> GameStatus:
    """
    Transition function for the game status.

    A solved code wins regardless of the attempt number; otherwise reaching
    the attempt cap loses. Terminal states have no outgoing transitions.

    Raises:
        GameAlreadyEnded: If ``current`` is terminal
    """
    if current.is_terminal:
        raise GameAlreadyEnded(f"Game is already {current.value}")
    if exact_matches == code_length:
        return GameStatus.WON
    if guess_number >= max_attempts:
        return GameStatus.LOST
    return GameStatus.PLAYING


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class GuessRecord:
    """A single scored attempt. Immutable once created."""
    guess_number: int
    guess: Tuple[str, ...]
    black_pegs: int
    white_pegs: int

    def to_record(self) -> Dict[str, Any]:
        return {
            'guessNumber': self.guess_number,
            'guess': list(self.guess),
            'blackPegs': self.black_pegs,
            'whitePegs': self.white_pegs,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'GuessRecord':
        return cls(
            guess_number=int(record['guessNumber']),
            guess=tuple(record['guess']),
            black_pegs=int(record['blackPegs']),
            white_pegs=int(record['whitePegs']),
        )


@dataclass(frozen=True)
class Game:
    """Server-side game record. The secret code never changes."""
    game_id: str
    user_id: str
    secret_code: Tuple[str, ...]
    difficulty: str = DEFAULT_DIFFICULTY
    guesses: Tuple[GuessRecord, ...] = ()
    status: GameStatus = GameStatus.PLAYING
    max_attempts: int = MAX_ATTEMPTS
    started_at: str = field(default_factory=_utcnow)

    @property
    def total_guesses(self) -> int:
        return len(self.guesses)

    @property
    def code_length(self) -> int:
        return len(self.secret_code)

    @property
    def attempts_remaining(self) -> int:
        return max(0, self.max_attempts - self.total_guesses)

    def to_record(self) -> Dict[str, Any]:
        """Storage document, keyed by (gameId, userId)."""
        return {
            'gameId': self.game_id,
            'userId': self.user_id,
            'difficulty': self.difficulty,
            'secretCode': list(self.secret_code),
            'guesses': [g.to_record() for g in self.guesses],
            'totalGuesses': self.total_guesses,
            'gameStatus': self.status.value,
            'maxAttempts': self.max_attempts,
            'startedAt': self.started_at,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Game':
        return cls(
            game_id=record['gameId'],
            user_id=record['userId'],
            difficulty=record.get('difficulty', DEFAULT_DIFFICULTY),
            secret_code=tuple(record['secretCode']),
            guesses=tuple(GuessRecord.from_record(g) for g in record.get('guesses', [])),
            status=GameStatus(record.get('gameStatus', GameStatus.PLAYING.value)),
            max_attempts=int(record.get('maxAttempts', MAX_ATTEMPTS)),
            started_at=record.get('startedAt') or _utcnow(),
        )

    def to_public_dict(self) -> Dict[str, Any]:
        """Client view of the game. The secret is only revealed once the game has ended."""
        return {
            'gameId': self.game_id,
            'difficulty': self.difficulty,
            'codeLength': self.code_length,
            'maxAttempts': self.max_attempts,
            'totalGuesses': self.total_guesses,
            'attemptsRemaining': self.attempts_remaining,
            'gameStatus': self.status.value,
            'guesses': [g.to_record() for g in self.guesses],
            'secretCode': list(self.secret_code) if self.status.is_terminal else None,
            'startedAt': self.started_at,
        }


@dataclass(frozen=True)
class GuessResult:
    """Response payload for a scored guess."""
    guess: Tuple[str, ...]
    black_pegs: int
    white_pegs: int
    guess_number: int
    game_status: GameStatus
    secret_code: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'guess': list(self.guess),
            'blackPegs': self.black_pegs,
            'whitePegs': self.white_pegs,
            'guessNumber': self.guess_number,
            'gameStatus': self.game_status.value,
            'secretCode': list(self.secret_code) if self.secret_code is not None else None,
        }
