"""
Player Data Models

Contains leaderboard-related data structures.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PlayerRecord:
    """Leaderboard entry for one player at one difficulty."""
    user_id: str
    difficulty: str
    games_won: int = 0
    best_score: int = 0  # fewest guesses needed to win, lower is better
    games_played: int = 0
    username: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'userId': self.user_id,
            'username': self.username,
            'difficulty': self.difficulty,
            'gamesWon': self.games_won,
            'bestScore': self.best_score,
            'gamesPlayed': self.games_played,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'PlayerRecord':
        return cls(
            user_id=record['userId'],
            difficulty=record['difficulty'],
            games_won=int(record.get('gamesWon', 0)),
            best_score=int(record.get('bestScore', 0)),
            games_played=int(record.get('gamesPlayed', 0)),
            username=record.get('username'),
        )
