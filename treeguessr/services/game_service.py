"""
Game Service

Owns the current round of every browser game and dispatches player intents
to the round engine.
"""

import random
import uuid
from typing import Dict, List, Optional

from ..config.game_settings import WORD_SOURCE_ERROR_MESSAGE
from ..models.round import Round, RoundView
from ..utils.game_logger import game_logger
from . import round_engine
from .rulesets import Ruleset, get_ruleset
from .word_source import WordSourceError, get_word_statistics, load_word_list


class WordSourceUnavailableError(RuntimeError):
    """Raised when a round is requested before the word list has loaded."""


class GameService:
    """
    Game service managing one round per game id.

    This class handles:
    - Holding the phrase list loaded at startup (or on reload)
    - Starting and replacing rounds
    - Dispatching letter, word and input-mode intents to the engine
    - Logging terminal transitions
    """

    def __init__(self,
                 candidates: Optional[List[str]] = None,
                 default_ruleset: Optional[str] = None,
                 word_list_path: Optional[str] = None,
                 load_error: Optional[str] = None,
                 rng: Optional[random.Random] = None):
        self.games: Dict[str, Round] = {}
        self.candidates: List[str] = list(candidates or [])
        self.default_ruleset: Ruleset = get_ruleset(default_ruleset)
        self.word_list_path = word_list_path
        self.load_error = load_error
        self.rng = rng

    @property
    def ready(self) -> bool:
        return bool(self.candidates)

    def reload_word_source(self, path: Optional[str] = None) -> bool:
        """
        Reload the phrase list. On failure the previous list is dropped and
        the service stays inert until the next successful reload.

        Returns:
            bool: True if phrases were loaded
        """
        path = path or self.word_list_path
        if path is None:
            self.candidates = []
            self.load_error = WORD_SOURCE_ERROR_MESSAGE
            return False
        self.word_list_path = path

        try:
            self.candidates = load_word_list(path)
        except WordSourceError as e:
            game_logger.logger.error(f"Word source load failed: {e}")
            self.candidates = []
            self.load_error = WORD_SOURCE_ERROR_MESSAGE
            return False

        self.load_error = None
        return True

    def word_statistics(self) -> dict:
        return get_word_statistics(self.candidates)

    def _start_round(self, ruleset: Ruleset) -> Round:
        if not self.ready:
            raise WordSourceUnavailableError(self.load_error or WORD_SOURCE_ERROR_MESSAGE)
        return round_engine.start_round(self.candidates, ruleset, rng=self.rng)

    def create_new_game(self, ruleset_name: Optional[str] = None) -> str:
        """
        Creates a new game with a fresh round.

        Args:
            ruleset_name: Registered ruleset, defaults to the service default

        Returns:
            str: Unique game ID

        Raises:
            WordSourceUnavailableError: If no phrases are loaded
            KeyError: If the ruleset is unknown
        """
        ruleset = get_ruleset(ruleset_name) if ruleset_name else self.default_ruleset
        round_ = self._start_round(ruleset)

        game_id = str(uuid.uuid4())
        self.games[game_id] = round_
        game_logger.log_game_event(game_id, 'round_started', ruleset=ruleset.name,
                                   difficulty=round_.difficulty, length=len(round_.secret))
        return game_id

    def new_round(self, game_id: str) -> Optional[RoundView]:
        """Replace the game's round wholesale, finished or not, keeping its ruleset."""
        if game_id not in self.games:
            return None

        round_ = self._start_round(self.games[game_id].ruleset)
        self.games[game_id] = round_
        game_logger.log_game_event(game_id, 'round_started', ruleset=round_.ruleset.name,
                                   difficulty=round_.difficulty, length=len(round_.secret))
        return RoundView.from_round(game_id, round_)

    def get_round(self, game_id: str) -> Optional[Round]:
        return self.games.get(game_id)

    def get_round_view(self, game_id: str) -> Optional[RoundView]:
        """Returns the snapshot for a game, without the answer while playing."""
        round_ = self.games.get(game_id)
        if round_ is None:
            return None
        return RoundView.from_round(game_id, round_)

    def dispatch(self, game_id: str, intent: round_engine.Intent) -> Optional[RoundView]:
        """
        Apply a player intent to the game's round and store the result.

        Returns:
            Updated RoundView or None if the game is not found
        """
        previous = self.games.get(game_id)
        if previous is None:
            return None

        current = round_engine.apply_intent(previous, intent)
        self.games[game_id] = current

        if current.is_over and not previous.is_over:
            game_logger.log_game_event(
                game_id, f"game_{current.state.value}",
                target_word=current.secret, score=current.score,
                guessed_letters=len(current.guessed_letters),
                word_guesses=len(current.word_guesses)
            )

        return RoundView.from_round(game_id, current)

    def guess_letter(self, game_id: str, letter: str) -> Optional[RoundView]:
        return self.dispatch(game_id, round_engine.GuessLetter(letter))

    def guess_word(self, game_id: str, text: str) -> Optional[RoundView]:
        return self.dispatch(game_id, round_engine.GuessWord(text))

    def set_mode(self, game_id: str, mode: str) -> Optional[RoundView]:
        return self.dispatch(game_id, round_engine.SetMode(mode))

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game from memory.

        Returns:
            bool: True if game was deleted, False if not found
        """
        if game_id in self.games:
            del self.games[game_id]
            return True
        return False


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(word_list_path: Optional[str] = None,
                            default_ruleset: Optional[str] = None,
                            rng: Optional[random.Random] = None) -> GameService:
    """
    Initialize the global game service instance and load the word list.

    A failed load does not raise: the service is created inert and reports
    load_error until reload_word_source() succeeds.
    """
    global _game_service
    service = GameService(default_ruleset=default_ruleset, word_list_path=word_list_path, rng=rng)
    service.reload_word_source()
    _game_service = service
    return _game_service
