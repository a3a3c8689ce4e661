"""
Round Engine

Pure state transitions for a single round. Every function takes a Round and
returns a new Round; nothing here keeps state between calls or performs I/O.
Invalid input and any intent on a finished round are silent no-ops that
return the round unchanged.
"""

import random
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Union

from ..config.game_settings import (
    ALPHABET,
    COMMON_LETTERS,
    LONG_PHRASE_LENGTH,
    LOSS_MESSAGES,
    WIN_MESSAGE,
)
from ..models.round import InputMode, Round, RoundState
from .rulesets import Ruleset, get_ruleset


class EmptyCandidatesError(ValueError):
    """Raised when a round is requested from an empty candidate collection."""


def normalize_phrase(text: str) -> str:
    """Upper-case and collapse whitespace so phrases compare reliably."""
    return " ".join(text.upper().split())


def rate_difficulty(phrase: str) -> int:
    """
    Rate a phrase from 1 (easy) to 4 (hard).

    One step each for being long, being a single word, and having mostly
    uncommon letters.
    """
    difficulty = 1
    if len(phrase) > LONG_PHRASE_LENGTH:
        difficulty += 1
    if " " not in phrase:
        difficulty += 1

    unique_letters = set(phrase.replace(" ", ""))
    uncommon = [letter for letter in unique_letters if letter not in COMMON_LETTERS]
    if unique_letters and len(uncommon) / len(unique_letters) > 0.5:
        difficulty += 1

    return difficulty


def start_round(candidates: Sequence[str],
                ruleset: Optional[Ruleset] = None,
                rng: Optional[random.Random] = None) -> Round:
    """
    Start a fresh round with a phrase drawn uniformly at random.

    Args:
        candidates: Non-empty collection of candidate phrases
        ruleset: Scoring strategy, defaults to the configured default ruleset
        rng: Random source, defaults to the module-level generator

    Returns:
        Round: New round in the PLAYING state

    Raises:
        EmptyCandidatesError: If candidates is empty
    """
    if not candidates:
        raise EmptyCandidatesError("Cannot start a round without candidate phrases")

    ruleset = ruleset or get_ruleset()
    chooser = rng or random
    secret = normalize_phrase(chooser.choice(list(candidates)))

    return Round(
        secret=secret,
        ruleset=ruleset,
        score=ruleset.starting_score,
        attempts_remaining=ruleset.word_attempts,
        difficulty=rate_difficulty(secret),
    )


def evaluate(round_: Round) -> Round:
    """
    Re-derive the round state from its counters.

    Finished rounds are returned unchanged, so calling this twice is safe.
    A solved round is won even if the ruleset's loss condition also holds.
    """
    if round_.is_over:
        return round_

    if round_.is_solved:
        score = round_.score + round_.ruleset.win_bonus(round_)
        return replace(
            round_,
            score=score,
            state=RoundState.WON,
            message=WIN_MESSAGE.format(secret=round_.secret, score=score),
        )

    reason = round_.ruleset.loss_reason(round_)
    if reason is not None:
        return replace(
            round_,
            state=RoundState.LOST,
            message=LOSS_MESSAGES[reason.value].format(secret=round_.secret, score=round_.score),
        )

    return round_


def guess_letter(round_: Round, letter: str) -> Round:
    """Reveal a letter, apply the ruleset's scoring, then evaluate."""
    if round_.is_over or not isinstance(letter, str):
        return round_

    letter = letter.strip().upper()
    if len(letter) != 1 or letter not in ALPHABET:
        return round_
    if letter in round_.guessed_letters:
        return round_

    ruleset = round_.ruleset
    correct = letter in round_.unique_letters
    score = ruleset.clamp_score(round_.score + ruleset.letter_points(letter, correct))

    return evaluate(replace(
        round_,
        guessed_letters=round_.guessed_letters | {letter},
        score=score,
        wrong_letters=round_.wrong_letters if correct else round_.wrong_letters + 1,
    ))


def guess_word(round_: Round, candidate: str) -> Round:
    """
    Guess the whole phrase.

    A match reveals every letter and wins. A miss uses up one word attempt,
    applies the ruleset's wrong-word penalty and is kept in the history.
    """
    if round_.is_over or not isinstance(candidate, str):
        return round_

    guess = normalize_phrase(candidate)
    if not guess:
        return round_

    ruleset = round_.ruleset
    if guess == round_.secret:
        solved = replace(round_, guessed_letters=round_.guessed_letters | round_.unique_letters)
        return evaluate(replace(solved, score=solved.score + ruleset.word_win_bonus(solved)))

    return evaluate(replace(
        round_,
        attempts_remaining=round_.attempts_remaining - 1,
        score=ruleset.clamp_score(round_.score + ruleset.wrong_word_penalty),
        word_guesses=round_.word_guesses + (guess,),
    ))


def set_mode(round_: Round, mode: Union[InputMode, str]) -> Round:
    """Switch the active input surface; unknown modes are ignored."""
    if round_.is_over:
        return round_
    try:
        mode = InputMode(mode)
    except ValueError:
        return round_
    return replace(round_, mode=mode)


@dataclass(frozen=True)
class GuessLetter:
    letter: str


@dataclass(frozen=True)
class GuessWord:
    text: str


@dataclass(frozen=True)
class SetMode:
    mode: str


Intent = Union[GuessLetter, GuessWord, SetMode]


def apply_intent(round_: Round, intent: Intent) -> Round:
    """Reducer entry point: (Round, Intent) -> Round."""
    if isinstance(intent, GuessLetter):
        return guess_letter(round_, intent.letter)
    if isinstance(intent, GuessWord):
        return guess_word(round_, intent.text)
    if isinstance(intent, SetMode):
        return set_mode(round_, intent.mode)
    raise TypeError(f"Unsupported intent: {intent!r}")
