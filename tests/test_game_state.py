import pytest

from mastermind.errors import GameAlreadyEnded, InvalidGuessLength, InvalidInput
from mastermind.models.game import Game, GameStatus, GuessRecord, next_status
from mastermind.services.game_state import apply_guess

SECRET = ('red', 'green', 'blue', 'yellow')
MISS = ('pink', 'pink', 'pink', 'pink')


def _game(guesses=0, status=GameStatus.PLAYING, max_attempts=10):
    records = tuple(
        GuessRecord(guess_number=i + 1, guess=MISS, black_pegs=0, white_pegs=0)
        for i in range(guesses)
    )
    return Game(
        game_id='g1', user_id='u1', secret_code=SECRET,
        guesses=records, status=status, max_attempts=max_attempts,
    )


class TestNextStatus:
    def test_win_when_all_exact(self):
        assert next_status(GameStatus.PLAYING, 4, 4, 3) is GameStatus.WON

    def test_win_takes_precedence_over_cap(self):
        assert next_status(GameStatus.PLAYING, 4, 4, 10) is GameStatus.WON

    def test_lost_at_cap(self):
        assert next_status(GameStatus.PLAYING, 3, 4, 10) is GameStatus.LOST

    def test_custom_cap(self):
        assert next_status(GameStatus.PLAYING, 0, 4, 5, max_attempts=5) is GameStatus.LOST
        assert next_status(GameStatus.PLAYING, 0, 4, 5, max_attempts=12) is GameStatus.PLAYING

    def test_still_playing(self):
        assert next_status(GameStatus.PLAYING, 2, 4, 9) is GameStatus.PLAYING

    @pytest.mark.parametrize('terminal', [GameStatus.WON, GameStatus.LOST])
    def test_no_transition_out_of_terminal(self, terminal):
        with pytest.raises(GameAlreadyEnded):
            next_status(terminal, 4, 4, 1)

    def test_terminal_flags(self):
        assert not GameStatus.PLAYING.is_terminal
        assert GameStatus.WON.is_terminal
        assert GameStatus.LOST.is_terminal


class TestApplyGuess:
    def test_first_guess_appends_record(self):
        game = _game()
        updated, result = apply_guess(game, ['red', 'yellow', 'green', 'blue'])

        assert updated.total_guesses == 1
        assert updated.guesses[0] == GuessRecord(
            guess_number=1, guess=('red', 'yellow', 'green', 'blue'), black_pegs=1, white_pegs=3
        )
        assert result.guess_number == 1
        assert result.black_pegs == 1
        assert result.white_pegs == 3
        assert result.game_status is GameStatus.PLAYING

    def test_input_game_is_not_mutated(self):
        game = _game()
        apply_guess(game, list(MISS))
        assert game.total_guesses == 0
        assert game.status is GameStatus.PLAYING

    def test_ordinals_follow_attempt_order(self):
        game = _game()
        for _ in range(3):
            game, _ = apply_guess(game, list(MISS))
        assert [g.guess_number for g in game.guesses] == [1, 2, 3]

    def test_secret_withheld_while_playing(self):
        _, result = apply_guess(_game(), list(MISS))
        assert result.secret_code is None
        assert result.to_dict()['secretCode'] is None

    def test_winning_guess_reveals_secret(self):
        updated, result = apply_guess(_game(guesses=2), list(SECRET))
        assert updated.status is GameStatus.WON
        assert result.game_status is GameStatus.WON
        assert result.guess_number == 3
        assert result.secret_code == SECRET
        assert result.to_dict()['secretCode'] == list(SECRET)

    def test_tenth_miss_loses_and_reveals_secret(self):
        updated, result = apply_guess(_game(guesses=9), ['red', 'green', 'blue', 'pink'])
        assert updated.status is GameStatus.LOST
        assert result.guess_number == 10
        assert result.black_pegs == 3
        assert result.secret_code == SECRET

    def test_tenth_guess_can_still_win(self):
        updated, result = apply_guess(_game(guesses=9), list(SECRET))
        assert updated.status is GameStatus.WON
        assert result.guess_number == 10

    @pytest.mark.parametrize('status', [GameStatus.WON, GameStatus.LOST])
    def test_terminal_game_rejects_guess(self, status):
        game = _game(guesses=4, status=status)
        with pytest.raises(GameAlreadyEnded):
            apply_guess(game, list(SECRET))
        assert game.total_guesses == 4

    def test_wrong_length_rejected(self):
        with pytest.raises(InvalidGuessLength):
            apply_guess(_game(), ['red', 'green'])

    def test_wrong_length_is_invalid_input(self):
        with pytest.raises(InvalidInput):
            apply_guess(_game(), ['red'] * 5)

    def test_wire_format(self):
        _, result = apply_guess(_game(), ['red', 'green', 'pink', 'pink'])
        assert result.to_dict() == {
            'guess': ['red', 'green', 'pink', 'pink'],
            'blackPegs': 2,
            'whitePegs': 0,
            'guessNumber': 1,
            'gameStatus': 'playing',
            'secretCode': None,
        }


def test_game_record_round_trip():
    game, _ = apply_guess(_game(), ['red', 'yellow', 'green', 'blue'])
    assert Game.from_record(game.to_record()) == game


def test_public_view_hides_secret_until_ended():
    assert _game().to_public_dict()['secretCode'] is None
    won = _game(status=GameStatus.WON).to_public_dict()
    assert won['secretCode'] == list(SECRET)
