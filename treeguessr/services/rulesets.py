"""
Scoring Rulesets

A ruleset bundles everything that differs between game variants: starting
counters, per-letter scoring, the wrong-word penalty, win bonuses and the
loss predicate. The round engine only ever talks to a Ruleset, so variants
can be swapped without touching win/loss evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from ..config.game_settings import (
    CLASSIC_WORD_GUESS_ATTEMPTS,
    COMMON_LETTERS,
    CONSONANT_COST,
    DEFAULT_RULESET,
    MAX_WRONG_GUESSES,
    PENALTY_PER_WRONG_LETTER,
    PENALTY_PER_WRONG_WORD,
    POINTS_PER_CORRECT_LETTER,
    POINTS_PER_WORD_GUESS,
    SCORE_FLOOR,
    STARTING_SCORE,
    VOWEL_COST,
    VOWELS,
    WORD_GUESS_ATTEMPTS,
)
from ..models.round import LossReason

if TYPE_CHECKING:
    from ..models.round import Round


def reward_penalty_points(letter: str, correct: bool) -> int:
    """Correct letters earn points (double for uncommon letters); wrong ones cost."""
    if not correct:
        return PENALTY_PER_WRONG_LETTER
    if letter in COMMON_LETTERS:
        return POINTS_PER_CORRECT_LETTER
    return POINTS_PER_CORRECT_LETTER * 2


def cost_per_guess_points(letter: str, correct: bool) -> int:
    """Every guess costs points whether or not it is in the secret."""
    return -(VOWEL_COST if letter in VOWELS else CONSONANT_COST)


def difficulty_win_bonus(round_: "Round") -> int:
    return POINTS_PER_WORD_GUESS * round_.difficulty


def letter_count_word_bonus(round_: "Round") -> int:
    return POINTS_PER_CORRECT_LETTER * len(round_.unique_letters)


def no_bonus(round_: "Round") -> int:
    return 0


@dataclass(frozen=True)
class Ruleset:
    """Scoring and loss-condition strategy for a round.

    Attributes:
        name: Registry key
        description: Short human-readable summary
        starting_score: Score at round start
        word_attempts: Whole-phrase guesses allowed per round
        letter_points: Score delta for a letter guess, given (letter, correct)
        max_wrong_letters: Wrong letters that end the round, or None for no limit
        score_floor: Score at or below which the round is lost, or None.
            The score is clamped so it never drops below the floor.
        wrong_word_penalty: Score delta for a wrong whole-phrase guess
        win_bonus: Bonus added when the round is won by any means
        word_win_bonus: Extra bonus added when won by guessing the whole phrase
    """
    name: str
    description: str
    starting_score: int
    word_attempts: int
    letter_points: Callable[[str, bool], int]
    max_wrong_letters: Optional[int] = None
    score_floor: Optional[int] = None
    wrong_word_penalty: int = 0
    win_bonus: Callable[["Round"], int] = no_bonus
    word_win_bonus: Callable[["Round"], int] = no_bonus

    def clamp_score(self, score: int) -> int:
        if self.score_floor is None:
            return score
        return max(score, self.score_floor)

    def loss_reason(self, round_: "Round") -> Optional[LossReason]:
        """Return why the round is lost, or None if it may continue."""
        if round_.attempts_remaining <= 0:
            return LossReason.WORD_ATTEMPTS
        if self.max_wrong_letters is not None and round_.wrong_letters >= self.max_wrong_letters:
            return LossReason.WRONG_LETTERS
        if self.score_floor is not None and round_.score <= self.score_floor:
            return LossReason.SCORE_FLOOR
        return None

    def describe(self) -> Dict:
        return {
            'name': self.name,
            'description': self.description,
            'starting_score': self.starting_score,
            'word_attempts': self.word_attempts,
            'max_wrong_letters': self.max_wrong_letters,
            'score_floor': self.score_floor,
            'wrong_word_penalty': self.wrong_word_penalty,
        }


REWARD_PENALTY = Ruleset(
    name="reward_penalty",
    description="Correct letters score, wrong letters cost; six wrong letters or one wrong tree guess ends the round.",
    starting_score=0,
    word_attempts=1,
    letter_points=reward_penalty_points,
    max_wrong_letters=MAX_WRONG_GUESSES,
    wrong_word_penalty=PENALTY_PER_WRONG_WORD,
    win_bonus=difficulty_win_bonus,
    word_win_bonus=letter_count_word_bonus,
)

COST_PER_GUESS = Ruleset(
    name="cost_per_guess",
    description="Every letter costs points (vowels more); the round ends when the score reaches the floor.",
    starting_score=STARTING_SCORE,
    word_attempts=WORD_GUESS_ATTEMPTS,
    letter_points=cost_per_guess_points,
    score_floor=SCORE_FLOOR,
)

COST_PER_GUESS_ZERO = Ruleset(
    name="cost_per_guess_zero",
    description="Every letter costs points (vowels more); the round ends when the score reaches zero.",
    starting_score=STARTING_SCORE,
    word_attempts=CLASSIC_WORD_GUESS_ATTEMPTS,
    letter_points=cost_per_guess_points,
    score_floor=0,
)

_registry: Dict[str, Ruleset] = {
    ruleset.name: ruleset
    for ruleset in (REWARD_PENALTY, COST_PER_GUESS, COST_PER_GUESS_ZERO)
}


def get_ruleset(name: Optional[str] = None) -> Ruleset:
    """Return the ruleset registered under name, or the default. Raises KeyError."""
    key = (name or DEFAULT_RULESET).strip().lower()
    if key not in _registry:
        raise KeyError(f"Unknown ruleset: {name!r}")
    return _registry[key]


def register_ruleset(ruleset: Ruleset) -> None:
    """Register or override a ruleset under its name."""
    if not ruleset.name:
        raise ValueError("Ruleset name must be a non-empty string")
    _registry[ruleset.name.strip().lower()] = ruleset


def available_rulesets() -> List[Ruleset]:
    return list(_registry.values())
