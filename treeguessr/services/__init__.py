"""
Services Package

Contains all business logic: the pure round engine, the scoring rulesets,
the word source and the game service that ties them together.
"""

from .game_service import GameService, WordSourceUnavailableError, get_game_service, initialize_game_service
from .round_engine import EmptyCandidatesError
from .rulesets import Ruleset, available_rulesets, get_ruleset
from .word_source import WordSourceError

__all__ = [
    'GameService', 'WordSourceUnavailableError', 'get_game_service', 'initialize_game_service',
    'EmptyCandidatesError',
    'Ruleset', 'available_rulesets', 'get_ruleset',
    'WordSourceError'
]
