"""
Game Configuration Constants Module

All scoring values, letter sets and message templates used by the rulesets
and the round engine are centralized here so the rules can be tuned without
touching engine code.
"""

from typing import Final, FrozenSet

ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

COMMON_LETTERS: Final[FrozenSet[str]] = frozenset("ETAOINSHR")
"""
Letters that appear most often in English text.
Correct guesses outside this set score double in the reward/penalty ruleset,
and the difficulty rating counts letters outside it.
"""

VOWELS: Final[FrozenSet[str]] = frozenset("AEIOU")

# Reward/penalty ruleset
POINTS_PER_CORRECT_LETTER: Final[int] = 10
POINTS_PER_WORD_GUESS: Final[int] = 100
PENALTY_PER_WRONG_LETTER: Final[int] = -5
PENALTY_PER_WRONG_WORD: Final[int] = -25
MAX_WRONG_GUESSES: Final[int] = 6

# Cost-per-guess rulesets
STARTING_SCORE: Final[int] = 100
VOWEL_COST: Final[int] = 15
CONSONANT_COST: Final[int] = 5
SCORE_FLOOR: Final[int] = 5
WORD_GUESS_ATTEMPTS: Final[int] = 5
CLASSIC_WORD_GUESS_ATTEMPTS: Final[int] = 3

DEFAULT_RULESET: Final[str] = "cost_per_guess"

# Difficulty rating
LONG_PHRASE_LENGTH: Final[int] = 10
"""Phrases longer than this many characters are one step harder."""

# End-of-round messages
WIN_MESSAGE: Final[str] = "You got it! It was {secret}. Final Score: {score}"
LOSS_MESSAGES: Final[dict] = {
    "wrong_letters": "Game over! The tree was: {secret}",
    "score_floor": "Out of points! The tree was: {secret}",
    "word_attempts": "Sorry, that's not it! The tree was: {secret}",
}

WORD_SOURCE_ERROR_MESSAGE: Final[str] = "Could not load tree list."
