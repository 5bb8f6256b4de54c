"""
Guess Evaluator

Classic two-pass Mastermind scoring: exact matches (black pegs) and
color-only matches (white pegs).
"""

from typing import Hashable, Sequence, Tuple

from ..errors import InvalidInput, InvalidGuessLength


def evaluate(secret: Sequence[Hashable], guess: Sequence[Hashable]) -> Tuple[int, int]:
    """
    Score a guess against the secret code.

    Args:
        secret: The hidden peg sequence
        guess: The submitted peg sequence, same length as ``secret``

    Returns:
        Tuple of (exact_matches, color_matches). Color matches never include
        pegs already counted as exact matches.

    Raises:
        InvalidInput: If either sequence is empty
        InvalidGuessLength: If the lengths differ
    """
    if not secret or not guess:
        raise InvalidInput("Secret and guess must be non-empty")
    if len(secret) != len(guess):
        raise InvalidGuessLength(
            f"Guess must have {len(secret)} pegs, got {len(guess)}"
        )

    # First pass: exact position matches
    exact_matches = 0
    for secret_peg, guess_peg in zip(secret, guess):
        if secret_peg == guess_peg:
            exact_matches += 1

    # Second pass: shared pegs regardless of position, each secret peg
    # consumable once
    remaining = list(secret)
    raw_matches = 0
    for peg in guess:
        if peg in remaining:
            raw_matches += 1
            remaining.remove(peg)

    return exact_matches, raw_matches - exact_matches
