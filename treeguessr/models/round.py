"""
Round Data Models

Contains the immutable round value threaded through the engine, its enums,
and the JSON-ready snapshot handed to the view layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, FrozenSet, List, Optional, Tuple

if TYPE_CHECKING:
    from ..services.rulesets import Ruleset


class RoundState(Enum):
    """Lifecycle state of a round. WON and LOST are terminal."""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class InputMode(Enum):
    """Which input surface is active for the round."""
    LETTER = "letter"
    WORD = "word"


class LossReason(Enum):
    """Why a round was lost; each reason has its own end-of-round message."""
    WRONG_LETTERS = "wrong_letters"
    SCORE_FLOOR = "score_floor"
    WORD_ATTEMPTS = "word_attempts"


@dataclass(frozen=True)
class Round:
    """One play-through from phrase selection to a terminal state.

    Engine operations never mutate a Round; they return a new one built
    with dataclasses.replace.
    """
    secret: str
    ruleset: "Ruleset"
    score: int
    attempts_remaining: int
    guessed_letters: FrozenSet[str] = frozenset()
    wrong_letters: int = 0
    word_guesses: Tuple[str, ...] = ()
    difficulty: int = 1
    state: RoundState = RoundState.PLAYING
    message: str = ""
    mode: InputMode = InputMode.LETTER

    @property
    def unique_letters(self) -> FrozenSet[str]:
        return frozenset(self.secret.replace(" ", ""))

    @property
    def is_solved(self) -> bool:
        letters = self.unique_letters
        return bool(letters) and letters <= self.guessed_letters

    @property
    def is_over(self) -> bool:
        return self.state is not RoundState.PLAYING

    @property
    def absent_letters(self) -> FrozenSet[str]:
        """Guessed letters that do not occur in the secret."""
        return self.guessed_letters - self.unique_letters

    def slots(self) -> List[Optional[str]]:
        """Per-character reveal list: letter if revealed, None if hidden, ' ' for gaps."""
        result: List[Optional[str]] = []
        for char in self.secret:
            if char == " ":
                result.append(" ")
            elif char in self.guessed_letters:
                result.append(char)
            else:
                result.append(None)
        return result


@dataclass
class RoundView:
    """Read-only snapshot of a round for rendering and JSON serialization."""
    game_id: str
    state: str
    message: str
    mode: str
    score: int
    attempts_remaining: int
    word_attempts: int
    wrong_letters: int
    max_wrong_letters: Optional[int]
    slots: List[Optional[str]]
    guessed_letters: List[str]
    absent_letters: List[str]
    word_guesses: List[str] = field(default_factory=list)
    difficulty: int = 1
    ruleset: str = ""
    answer: Optional[str] = None  # Only included when the round is over

    @classmethod
    def from_round(cls, game_id: str, round_: Round) -> "RoundView":
        return cls(
            game_id=game_id,
            state=round_.state.value,
            message=round_.message,
            mode=round_.mode.value,
            score=round_.score,
            attempts_remaining=round_.attempts_remaining,
            word_attempts=round_.ruleset.word_attempts,
            wrong_letters=round_.wrong_letters,
            max_wrong_letters=round_.ruleset.max_wrong_letters,
            slots=round_.slots(),
            guessed_letters=sorted(round_.guessed_letters),
            absent_letters=sorted(round_.absent_letters),
            word_guesses=list(round_.word_guesses),
            difficulty=round_.difficulty,
            ruleset=round_.ruleset.name,
            answer=round_.secret if round_.is_over else None,
        )
