"""
Leaderboard Ranker

Orders player records by games won (descending), then best score
(ascending, fewer guesses is better).
"""

from typing import Iterable, List, Optional

from ..models.player import PlayerRecord


def filter_by_difficulty(records: Iterable[PlayerRecord],
                         difficulty: Optional[str] = None) -> List[PlayerRecord]:
    """Keep only records for ``difficulty``. ``None`` keeps everything."""
    if difficulty is None:
        return list(records)
    return [record for record in records if record.difficulty == difficulty]


def _ranking_key(record: PlayerRecord):
    return (-record.games_won, record.best_score)


def rank(records: Iterable[PlayerRecord], difficulty: Optional[str] = None) -> List[PlayerRecord]:
    """
    Rank a snapshot of player records.

    The sort is stable: fully tied records keep their input order.

    Args:
        records: Player records to rank (not modified)
        difficulty: Optional exact-match pre-filter

    Returns:
        New list of records in leaderboard order
    """
    return sorted(filter_by_difficulty(records, difficulty), key=_ranking_key)
