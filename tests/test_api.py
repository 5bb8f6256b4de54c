import pytest

from mastermind.models.game import GameStatus

HEADERS = {'X-User-Id': 'player-1', 'X-Username': 'ada'}
SECRET = ['red', 'green', 'blue', 'yellow']
MISS = ['pink', 'pink', 'pink', 'pink']


def _guess(client, guess, game_id='game-1', headers=HEADERS):
    return client.post(f'/api/mastermind/{game_id}/guess', json={'guess': guess}, headers=headers)


def test_create_game(client):
    res = client.post('/api/mastermind', json={'difficulty': 'hard'}, headers=HEADERS)
    assert res.status_code == 201
    data = res.get_json()
    assert data['success'] is True
    assert data['state']['difficulty'] == 'hard'
    assert data['state']['codeLength'] == 6
    assert data['state']['secretCode'] is None
    assert data['state']['gameId'] == data['game_id']


def test_create_game_without_body_uses_default(client):
    res = client.post('/api/mastermind', headers=HEADERS)
    assert res.status_code == 201
    assert res.get_json()['state']['difficulty'] == 'medium'


def test_create_game_rejects_unknown_difficulty(client):
    res = client.post('/api/mastermind', json={'difficulty': 'nightmare'}, headers=HEADERS)
    assert res.status_code == 400
    assert res.get_json()['code'] == 'invalid_difficulty'


def test_player_identity_required(client):
    res = client.post('/api/mastermind', json={'difficulty': 'easy'})
    assert res.status_code == 400
    assert res.get_json()['success'] is False


def test_get_state_and_not_found(client, make_game):
    make_game()
    res = client.get('/api/mastermind/game-1', headers=HEADERS)
    assert res.status_code == 200
    assert res.get_json()['state']['totalGuesses'] == 0

    res = client.get('/api/mastermind/missing', headers=HEADERS)
    assert res.status_code == 404
    assert res.get_json()['code'] == 'game_not_found'

    # games are only visible to their owner
    res = client.get('/api/mastermind/game-1', headers={'X-User-Id': 'someone-else'})
    assert res.status_code == 404


def test_guess_flow_until_win(client, make_game):
    make_game()
    res = _guess(client, ['red', 'yellow', 'green', 'blue'])
    assert res.status_code == 200
    result = res.get_json()['result']
    assert result == {
        'guess': ['red', 'yellow', 'green', 'blue'],
        'blackPegs': 1,
        'whitePegs': 3,
        'guessNumber': 1,
        'gameStatus': 'playing',
        'secretCode': None,
    }

    result = _guess(client, SECRET).get_json()['result']
    assert result['gameStatus'] == 'won'
    assert result['guessNumber'] == 2
    assert result['secretCode'] == SECRET

    res = _guess(client, SECRET)
    assert res.status_code == 409
    assert res.get_json()['code'] == 'game_already_ended'

    state = client.get('/api/mastermind/game-1', headers=HEADERS).get_json()['state']
    assert state['totalGuesses'] == 2
    assert state['secretCode'] == SECRET


def test_guess_loses_on_tenth_attempt(client, make_game):
    make_game()
    for _ in range(9):
        assert _guess(client, MISS).get_json()['result']['gameStatus'] == 'playing'
    result = _guess(client, MISS).get_json()['result']
    assert result['gameStatus'] == 'lost'
    assert result['guessNumber'] == 10
    assert result['secretCode'] == SECRET


def test_guess_validation_errors(client, make_game):
    make_game()
    res = client.post('/api/mastermind/game-1/guess', json={}, headers=HEADERS)
    assert res.status_code == 400

    res = _guess(client, ['red', 'green'])
    assert res.status_code == 400
    assert res.get_json()['code'] == 'invalid_guess_length'

    res = _guess(client, ['red', 'green', 'blue', 'black'])
    assert res.status_code == 400
    assert res.get_json()['code'] == 'invalid_input'


@pytest.mark.parametrize('body', ['guess', ['guess'], 42])
def test_guess_body_must_be_an_object(client, make_game, body):
    make_game()
    res = client.post('/api/mastermind/game-1/guess', json=body, headers=HEADERS)
    assert res.status_code == 400
    assert res.get_json()['success'] is False


@pytest.mark.parametrize('guess', [['red'], ['red', 'green', 'blue', 'magenta']])
def test_malformed_guess_on_finished_game(client, make_game, guess):
    make_game(status=GameStatus.LOST)
    res = _guess(client, guess)
    assert res.status_code == 409
    assert res.get_json()['code'] == 'game_already_ended'


def test_guess_on_missing_game(client):
    res = _guess(client, MISS, game_id='missing')
    assert res.status_code == 404


def test_list_and_delete_games(client):
    for difficulty in ('easy', 'hard'):
        client.post('/api/mastermind', json={'difficulty': difficulty}, headers=HEADERS)

    games = client.get('/api/mastermind', headers=HEADERS).get_json()['games']
    assert len(games) == 2

    easy = client.get('/api/mastermind?difficulty=easy', headers=HEADERS).get_json()['games']
    assert [g['difficulty'] for g in easy] == ['easy']

    limited = client.get('/api/mastermind?limit=1', headers=HEADERS).get_json()['games']
    assert len(limited) == 1

    assert client.get('/api/mastermind?limit=zero', headers=HEADERS).status_code == 400

    game_id = easy[0]['gameId']
    assert client.delete(f'/api/mastermind/{game_id}', headers=HEADERS).status_code == 200
    assert client.delete(f'/api/mastermind/{game_id}', headers=HEADERS).status_code == 404


def test_leaderboard(client, game_service):
    store = game_service.leaderboard_store
    store.record_result('a', 'medium', won=True, guesses_used=5)
    store.record_result('a', 'medium', won=True, guesses_used=6)
    store.record_result('b', 'medium', won=True, guesses_used=9)
    store.record_result('b', 'medium', won=True, guesses_used=9)
    store.record_result('b', 'medium', won=True, guesses_used=9)
    store.record_result('c', 'medium', won=True, guesses_used=3)
    store.record_result('c', 'medium', won=True, guesses_used=8)
    store.record_result('d', 'easy', won=True, guesses_used=1)

    res = client.get('/api/mastermind/leaderboard?difficulty=medium')
    assert res.status_code == 200
    board = res.get_json()['leaderboard']
    assert [(e['userId'], e['gamesWon'], e['bestScore']) for e in board] == [
        ('b', 3, 9), ('c', 2, 3), ('a', 2, 5),
    ]

    everyone = client.get('/api/mastermind/leaderboard').get_json()['leaderboard']
    assert len(everyone) == 4

    top = client.get('/api/mastermind/leaderboard?limit=1').get_json()['leaderboard']
    assert [e['userId'] for e in top] == ['b']

    res = client.get('/api/mastermind/leaderboard?difficulty=nightmare')
    assert res.status_code == 400


def test_won_game_reaches_leaderboard(client, make_game):
    make_game()
    _guess(client, SECRET)
    board = client.get('/api/mastermind/leaderboard').get_json()['leaderboard']
    assert board == [{
        'userId': 'player-1',
        'username': 'ada',
        'difficulty': 'medium',
        'gamesWon': 1,
        'bestScore': 1,
        'gamesPlayed': 1,
    }]


def test_health(client):
    res = client.get('/api/health')
    assert res.status_code == 200
    data = res.get_json()
    assert data['status'] == 'healthy'
    assert data['store_backend'] == 'memory'
