"""
Game State Controller

Turns a raw guess into a scored GuessRecord and a game status transition.
Pure: the input game is never mutated, a new Game is returned.
"""

from dataclasses import replace
from typing import Sequence, Tuple

from ..errors import GameAlreadyEnded, InvalidGuessLength
from ..models.game import Game, GuessRecord, GuessResult, next_status
from .evaluator import evaluate


def apply_guess(game: Game, guess: Sequence[str]) -> Tuple[Game, GuessResult]:
    """
    Score a guess and advance the game.

    Args:
        game: Current game record, must still be playing
        guess: Submitted peg sequence

    Returns:
        Tuple of (updated_game, result). ``result.secret_code`` is only set
        when the updated game has ended.

    Raises:
        GameAlreadyEnded: If the game is already won or lost
        InvalidGuessLength: If the guess length differs from the secret's
    """
    if game.status.is_terminal:
        raise GameAlreadyEnded(f"Game {game.game_id} is already {game.status.value}")
    if len(guess) != game.code_length:
        raise InvalidGuessLength(
            f"Guess must have {game.code_length} pegs, got {len(guess)}"
        )

    guess = tuple(guess)
    guess_number = game.total_guesses + 1
    exact_matches, color_matches = evaluate(game.secret_code, guess)
    status = next_status(
        game.status, exact_matches, game.code_length, guess_number, game.max_attempts
    )

    record = GuessRecord(
        guess_number=guess_number,
        guess=guess,
        black_pegs=exact_matches,
        white_pegs=color_matches,
    )
    updated = replace(game, guesses=game.guesses + (record,), status=status)

    result = GuessResult(
        guess=guess,
        black_pegs=exact_matches,
        white_pegs=color_matches,
        guess_number=guess_number,
        game_status=status,
        secret_code=game.secret_code if status.is_terminal else None,
    )
    return updated, result
