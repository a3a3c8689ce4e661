"""
Utilities Package

Contains decorators and the structured game logger.
"""

from .decorators import require_game_service, websocket_game_required
from .game_logger import game_logger

__all__ = ['require_game_service', 'websocket_game_required', 'game_logger']
