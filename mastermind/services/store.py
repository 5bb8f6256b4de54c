"""
Record Stores

Key-value persistence for games, keyed by (game_id, user_id), and for
leaderboard entries, keyed by (user_id, difficulty). Guesses are committed
with an optimistic conditional update on the stored attempt count, so at
most one guess can be recorded per ordinal.

Two backends are provided: an in-memory store (development and tests) and
a MongoDB store.
"""

import copy
import threading
from typing import Dict, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..errors import ConcurrentGuessError, GameNotFound
from ..models.game import Game
from ..models.player import PlayerRecord


class GameStore:
    """Interface for game record storage."""

    backend = 'abstract'

    def create(self, game: Game) -> None:
        raise NotImplementedError

    def get(self, game_id: str, user_id: str) -> Optional[Game]:
        raise NotImplementedError

    def list_for_user(self, user_id: str, difficulty: Optional[str] = None,
                      limit: Optional[int] = None) -> List[Game]:
        raise NotImplementedError

    def save_guess(self, game: Game, expected_total_guesses: int) -> None:
        """
        Commit ``game`` only if the stored record still has
        ``expected_total_guesses`` attempts.

        Raises:
            GameNotFound: If the record no longer exists
            ConcurrentGuessError: If another guess was committed first
        """
        raise NotImplementedError

    def delete(self, game_id: str, user_id: str) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError


class LeaderboardStore:
    """Interface for leaderboard record storage."""

    backend = 'abstract'

    def record_result(self, user_id: str, difficulty: str, won: bool,
                      guesses_used: int, username: Optional[str] = None) -> None:
        raise NotImplementedError

    def all(self, difficulty: Optional[str] = None) -> List[PlayerRecord]:
        raise NotImplementedError


class InMemoryGameStore(GameStore):
    """Thread-safe dict-backed game store."""

    backend = 'memory'

    def __init__(self):
        self._records: Dict[Tuple[str, str], Dict] = {}
        self._lock = threading.Lock()

    def create(self, game: Game) -> None:
        with self._lock:
            self._records[(game.game_id, game.user_id)] = game.to_record()

    def get(self, game_id: str, user_id: str) -> Optional[Game]:
        with self._lock:
            record = self._records.get((game_id, user_id))
            record = copy.deepcopy(record) if record is not None else None
        return Game.from_record(record) if record is not None else None

    def list_for_user(self, user_id, difficulty=None, limit=None):
        with self._lock:
            records = [
                copy.deepcopy(r) for (_, uid), r in self._records.items()
                if uid == user_id and (difficulty is None or r['difficulty'] == difficulty)
            ]
        records.sort(key=lambda r: r['startedAt'], reverse=True)
        if limit is not None:
            records = records[:limit]
        return [Game.from_record(r) for r in records]

    def save_guess(self, game: Game, expected_total_guesses: int) -> None:
        key = (game.game_id, game.user_id)
        with self._lock:
            current = self._records.get(key)
            if current is None:
                raise GameNotFound(f"Game {game.game_id} not found")
            if current['totalGuesses'] != expected_total_guesses:
                raise ConcurrentGuessError(
                    f"Game {game.game_id} already has {current['totalGuesses']} guesses"
                )
            self._records[key] = game.to_record()

    def delete(self, game_id: str, user_id: str) -> bool:
        with self._lock:
            return self._records.pop((game_id, user_id), None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._records)


class InMemoryLeaderboardStore(LeaderboardStore):
    """Thread-safe dict-backed leaderboard store."""

    backend = 'memory'

    def __init__(self):
        self._records: Dict[Tuple[str, str], Dict] = {}
        self._lock = threading.Lock()

    def record_result(self, user_id, difficulty, won, guesses_used, username=None):
        key = (user_id, difficulty)
        with self._lock:
            record = self._records.setdefault(key, {
                'userId': user_id,
                'difficulty': difficulty,
                'gamesWon': 0,
                'bestScore': None,
                'gamesPlayed': 0,
            })
            record['gamesPlayed'] += 1
            if username:
                record['username'] = username
            if won:
                record['gamesWon'] += 1
                if record['bestScore'] is None or guesses_used < record['bestScore']:
                    record['bestScore'] = guesses_used

    def all(self, difficulty=None):
        with self._lock:
            # insertion order is kept so equal rankings stay stable
            records = [
                dict(r) for r in self._records.values()
                if r['gamesWon'] > 0 and (difficulty is None or r['difficulty'] == difficulty)
            ]
        return [PlayerRecord.from_record(r) for r in records]


def connect_mongo(mongo_uri: str, db_name: str):
    """Open a MongoDB database handle and check the connection."""
    client = MongoClient(mongo_uri, server_api=ServerApi('1'))
    client.admin.command('ping')
    return client[db_name]


class MongoGameStore(GameStore):
    """MongoDB-backed game store."""

    backend = 'mongodb'

    def __init__(self, db):
        self.collection = db.games
        self.collection.create_index([("gameId", ASCENDING), ("userId", ASCENDING)], unique=True)
        self.collection.create_index([("userId", ASCENDING), ("startedAt", DESCENDING)])

    def create(self, game: Game) -> None:
        self.collection.insert_one(game.to_record())

    def get(self, game_id: str, user_id: str) -> Optional[Game]:
        record = self.collection.find_one({"gameId": game_id, "userId": user_id}, {"_id": 0})
        return Game.from_record(record) if record else None

    def list_for_user(self, user_id, difficulty=None, limit=None):
        query = {"userId": user_id}
        if difficulty is not None:
            query["difficulty"] = difficulty
        cursor = self.collection.find(query, {"_id": 0}).sort("startedAt", DESCENDING)
        if limit is not None:
            cursor = cursor.limit(limit)
        return [Game.from_record(r) for r in cursor]

    def save_guess(self, game: Game, expected_total_guesses: int) -> None:
        record = game.to_record()
        result = self.collection.update_one(
            {
                "gameId": game.game_id,
                "userId": game.user_id,
                "totalGuesses": expected_total_guesses,
            },
            {"$set": {
                "guesses": record["guesses"],
                "totalGuesses": record["totalGuesses"],
                "gameStatus": record["gameStatus"],
            }}
        )
        if result.matched_count == 0:
            if self.collection.count_documents({"gameId": game.game_id, "userId": game.user_id}) == 0:
                raise GameNotFound(f"Game {game.game_id} not found")
            raise ConcurrentGuessError(f"Game {game.game_id} was updated by another guess")

    def delete(self, game_id: str, user_id: str) -> bool:
        result = self.collection.delete_one({"gameId": game_id, "userId": user_id})
        return result.deleted_count > 0

    def count(self) -> int:
        return self.collection.count_documents({})


class MongoLeaderboardStore(LeaderboardStore):
    """MongoDB-backed leaderboard store."""

    backend = 'mongodb'

    def __init__(self, db):
        self.collection = db.leaderboard
        self.collection.create_index([("userId", ASCENDING), ("difficulty", ASCENDING)], unique=True)

    def record_result(self, user_id, difficulty, won, guesses_used, username=None):
        update = {"$inc": {"gamesPlayed": 1}}
        if username:
            update["$set"] = {"username": username}
        if won:
            update["$inc"]["gamesWon"] = 1
            update["$min"] = {"bestScore": guesses_used}
        self.collection.update_one(
            {"userId": user_id, "difficulty": difficulty}, update, upsert=True
        )

    def all(self, difficulty=None):
        query = {"gamesWon": {"$gt": 0}}
        if difficulty is not None:
            query["difficulty"] = difficulty
        cursor = self.collection.find(query, {"_id": 0}).sort("_id", ASCENDING)
        return [PlayerRecord.from_record(r) for r in cursor]
