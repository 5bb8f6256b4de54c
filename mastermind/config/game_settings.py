"""
Game Configuration Constants Module

This module defines the Mastermind rule constants: the attempt budget,
the peg alphabet and the difficulty tiers. All game parameters are
centralized here to enable easy modification.
"""

from typing import Dict, Final, List

# Maximum number of guess attempts allowed per game.
MAX_ATTEMPTS: Final[int] = 10

# Full peg alphabet, in display order. Difficulty tiers use a prefix of it.
PEG_COLORS: Final[List[str]] = [
    'red', 'green', 'blue', 'yellow', 'orange', 'purple', 'pink', 'cyan',
]

DIFFICULTY_SETTINGS: Final[Dict[str, Dict[str, int]]] = {
    'easy': {'code_length': 4, 'color_count': 6},
    'medium': {'code_length': 4, 'color_count': 8},
    'hard': {'code_length': 6, 'color_count': 8},
}

DEFAULT_DIFFICULTY: Final[str] = 'medium'


def get_difficulty_settings(difficulty: str) -> Dict:
    """
    Resolve a difficulty tier into its concrete game parameters.

    Args:
        difficulty: Tier name ("easy", "medium" or "hard")

    Returns:
        dict with ``code_length``, ``color_count`` and ``colors``

    Raises:
        KeyError: If the tier is unknown
    """
    settings = DIFFICULTY_SETTINGS[difficulty]
    return {
        'code_length': settings['code_length'],
        'color_count': settings['color_count'],
        'colors': PEG_COLORS[:settings['color_count']],
    }


def validate_difficulty_settings() -> bool:
    """
    Validates the consistency of the difficulty tiers.

    Returns:
        bool: True if every tier is playable

    Raises:
        ValueError: If any tier is misconfigured
    """
    if len(PEG_COLORS) != len(set(PEG_COLORS)):
        raise ValueError("Peg colors must be unique")

    if DEFAULT_DIFFICULTY not in DIFFICULTY_SETTINGS:
        raise ValueError(f"Default difficulty '{DEFAULT_DIFFICULTY}' is not defined")

    for name, settings in DIFFICULTY_SETTINGS.items():
        if settings['code_length'] < 1:
            raise ValueError(f"Difficulty '{name}' must have at least one peg")
        if not 1 <= settings['color_count'] <= len(PEG_COLORS):
            raise ValueError(
                f"Difficulty '{name}' uses {settings['color_count']} colors, "
                f"only {len(PEG_COLORS)} are available"
            )

    return True


if __name__ == "__main__":
    try:
        validate_difficulty_settings()
        print(" Difficulty settings validation passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
