import random

import pytest

from mastermind import create_app
from mastermind.config import TestingConfig
from mastermind.models.game import Game, GameStatus
from mastermind.services.game_service import initialize_game_service
from mastermind.services.store import InMemoryGameStore, InMemoryLeaderboardStore


@pytest.fixture()
def game_service():
    return initialize_game_service(
        InMemoryGameStore(),
        InMemoryLeaderboardStore(),
        rng=random.Random(1234),
    )


@pytest.fixture()
def app_and_socketio(game_service):
    application, socketio = create_app(TestingConfig)
    yield application, socketio


@pytest.fixture()
def flask_app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(app_and_socketio):
    application, socketio = app_and_socketio
    test_client = socketio.test_client(
        application,
        flask_test_client=application.test_client()
    )
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()


@pytest.fixture()
def make_game(game_service):
    """Store a game with a known secret and return it."""
    def _make(secret=('red', 'green', 'blue', 'yellow'), user_id='player-1',
              game_id='game-1', difficulty='medium', status=GameStatus.PLAYING):
        game = Game(
            game_id=game_id,
            user_id=user_id,
            difficulty=difficulty,
            secret_code=tuple(secret),
            status=status,
        )
        game_service.game_store.create(game)
        return game
    return _make
