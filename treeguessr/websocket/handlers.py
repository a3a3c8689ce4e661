"""
WebSocket Event Handlers

Socket.IO surface for the same intents the HTTP API exposes. A socket joins
the room of its game on its first event and receives round_state after every
intent sent to that game.
"""

from dataclasses import asdict
from flask import request
from flask_socketio import emit, join_room, leave_room
from ..services.game_service import WordSourceUnavailableError
from ..utils.decorators import websocket_game_required
from ..utils.game_logger import game_logger


def _room(game_id):
    return f"game_{game_id}"


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def broadcast_round_state(game_id, state):
        # The sender may not have joined yet; it always gets its own result.
        join_room(_room(game_id))
        socketio.emit('round_state', {
            'success': True,
            'state': asdict(state)
        }, to=_room(game_id))

    def report_error(action, game_id, error):
        game_logger.log_error(request, error, action, game_id)
        emit('error', {'error': str(error)})

    @socketio.on('join_game')
    @websocket_game_required
    def handle_join_game(data, game_service=None):
        """Join a game's room and receive its current snapshot."""
        game_id = data['game_id']
        try:
            join_room(_room(game_id))
            game_logger.log_user_action(request, 'join_game', game_id, transport='websocket')
            emit('round_state', {
                'success': True,
                'state': asdict(game_service.get_round_view(game_id))
            })
        except Exception as e:
            report_error('join_game', game_id, e)

    @socketio.on('leave_game')
    @websocket_game_required
    def handle_leave_game(data, game_service=None):
        game_id = data['game_id']
        try:
            leave_room(_room(game_id))
            game_logger.log_user_action(request, 'leave_game', game_id, transport='websocket')
        except Exception as e:
            report_error('leave_game', game_id, e)

    @socketio.on('guess_letter')
    @websocket_game_required
    def handle_guess_letter(data, game_service=None):
        """Guess a single letter."""
        game_id = data['game_id']
        try:
            letter = data.get('letter')
            game_logger.log_user_action(request, 'guess_letter', game_id, letter=letter, transport='websocket')
            broadcast_round_state(game_id, game_service.guess_letter(game_id, letter))
        except Exception as e:
            report_error('guess_letter', game_id, e)

    @socketio.on('guess_word')
    @websocket_game_required
    def handle_guess_word(data, game_service=None):
        """Guess the whole phrase."""
        game_id = data['game_id']
        try:
            guess = data.get('guess')
            game_logger.log_user_action(request, 'guess_word', game_id, guess=guess, transport='websocket')
            broadcast_round_state(game_id, game_service.guess_word(game_id, guess))
        except Exception as e:
            report_error('guess_word', game_id, e)

    @socketio.on('set_mode')
    @websocket_game_required
    def handle_set_mode(data, game_service=None):
        """Switch between letter and word entry."""
        game_id = data['game_id']
        try:
            mode = data.get('mode')
            game_logger.log_user_action(request, 'set_mode', game_id, mode=mode, transport='websocket')
            broadcast_round_state(game_id, game_service.set_mode(game_id, mode))
        except Exception as e:
            report_error('set_mode', game_id, e)

    @socketio.on('new_round')
    @websocket_game_required
    def handle_new_round(data, game_service=None):
        """Replace the game's round with a fresh one."""
        game_id = data['game_id']
        try:
            game_logger.log_user_action(request, 'new_round', game_id, transport='websocket')
            try:
                state = game_service.new_round(game_id)
            except WordSourceUnavailableError as e:
                emit('error', {'error': str(e)})
                return
            broadcast_round_state(game_id, state)
        except Exception as e:
            report_error('new_round', game_id, e)
