"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from dataclasses import asdict
from ..config.game_settings import WORD_SOURCE_ERROR_MESSAGE
from ..services.game_service import WordSourceUnavailableError
from ..services.rulesets import available_rulesets
from ..utils.decorators import require_game_service
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _word_source_unavailable(action, game_id=None, message=None):
    error_response = {
        'success': False,
        'error': message or WORD_SOURCE_ERROR_MESSAGE
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 503


def _game_not_found(action, game_id):
    error_response = {
        'success': False,
        'error': 'Game not found'
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 404


def _missing_field(action, game_id, field):
    error_response = {
        'success': False,
        'error': f'{field.capitalize()} is required'
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 400


def _state_response(action, game_id, state, **log_details):
    response_data = {
        'success': True,
        'state': asdict(state)
    }
    game_logger.log_server_response(request, action, True, response_data, game_id, **log_details)
    return jsonify(response_data)


def _error_response(action, error, game_id=None):
    game_logger.log_error(request, error, action, game_id)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 500


@game_bp.route('/new_game', methods=['POST'])
@require_game_service
def new_game(game_service):
    """Create a new game and start its first round."""
    try:
        data = _json_body()
        ruleset = data.get('ruleset')

        game_logger.log_user_action(request, 'new_game', ruleset=ruleset)

        try:
            game_id = game_service.create_new_game(ruleset)
        except KeyError:
            error_response = {
                'success': False,
                'error': f'Unknown ruleset: {ruleset}'
            }
            game_logger.log_server_response(request, 'new_game', False, error_response)
            return jsonify(error_response), 400
        except WordSourceUnavailableError as e:
            return _word_source_unavailable('new_game', message=str(e))

        state = game_service.get_round_view(game_id)
        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }
        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            ruleset=state.ruleset, difficulty=state.difficulty
        )
        return jsonify(response_data)

    except Exception as e:
        return _error_response('new_game', e)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game_service
def get_state(game_id, game_service):
    """Get the current round snapshot."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_round_view(game_id)
        if state is None:
            return _game_not_found('get_state', game_id)

        return _state_response('get_state', game_id, state)

    except Exception as e:
        return _error_response('get_state', e, game_id)


@game_bp.route('/game/<game_id>/letter', methods=['POST'])
@require_game_service
def guess_letter(game_id, game_service):
    """Guess a single letter. Invalid or repeated letters leave the round unchanged."""
    try:
        data = _json_body()
        if 'letter' not in data:
            return _missing_field('guess_letter', game_id, 'letter')

        letter = data['letter']
        game_logger.log_user_action(request, 'guess_letter', game_id, letter=letter)

        state = game_service.guess_letter(game_id, letter)
        if state is None:
            return _game_not_found('guess_letter', game_id)

        return _state_response('guess_letter', game_id, state, letter=letter)

    except Exception as e:
        return _error_response('guess_letter', e, game_id)


@game_bp.route('/game/<game_id>/word', methods=['POST'])
@require_game_service
def guess_word(game_id, game_service):
    """Guess the whole phrase."""
    try:
        data = _json_body()
        if 'guess' not in data:
            return _missing_field('guess_word', game_id, 'guess')

        guess = data['guess']
        game_logger.log_user_action(request, 'guess_word', game_id, guess=guess)

        state = game_service.guess_word(game_id, guess)
        if state is None:
            return _game_not_found('guess_word', game_id)

        return _state_response('guess_word', game_id, state, guess=guess)

    except Exception as e:
        return _error_response('guess_word', e, game_id)


@game_bp.route('/game/<game_id>/mode', methods=['POST'])
@require_game_service
def set_mode(game_id, game_service):
    """Switch between letter and word entry."""
    try:
        data = _json_body()
        if 'mode' not in data:
            return _missing_field('set_mode', game_id, 'mode')

        game_logger.log_user_action(request, 'set_mode', game_id, mode=data['mode'])

        state = game_service.set_mode(game_id, data['mode'])
        if state is None:
            return _game_not_found('set_mode', game_id)

        return _state_response('set_mode', game_id, state)

    except Exception as e:
        return _error_response('set_mode', e, game_id)


@game_bp.route('/game/<game_id>/new_round', methods=['POST'])
@require_game_service
def new_round(game_id, game_service):
    """Replace the game's round with a fresh one."""
    try:
        game_logger.log_user_action(request, 'new_round', game_id)

        try:
            state = game_service.new_round(game_id)
        except WordSourceUnavailableError as e:
            return _word_source_unavailable('new_round', game_id, str(e))

        if state is None:
            return _game_not_found('new_round', game_id)

        return _state_response('new_round', game_id, state, difficulty=state.difficulty)

    except Exception as e:
        return _error_response('new_round', e, game_id)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
@require_game_service
def delete_game(game_id, game_service):
    """Delete a game."""
    try:
        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)
        response_data = {
            'success': success
        }
        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)
            return jsonify(response_data)
        return jsonify(response_data), 404

    except Exception as e:
        return _error_response('delete_game', e, game_id)


@game_bp.route('/rulesets', methods=['GET'])
@require_game_service
def list_rulesets(game_service):
    """List the selectable rulesets and the server default."""
    try:
        game_logger.log_user_action(request, 'list_rulesets')

        response_data = {
            'success': True,
            'default': game_service.default_ruleset.name,
            'rulesets': [ruleset.describe() for ruleset in available_rulesets()]
        }
        game_logger.log_server_response(request, 'list_rulesets', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        return _error_response('list_rulesets', e)


@game_bp.route('/word_source/reload', methods=['POST'])
@require_game_service
def reload_word_source(game_service):
    """Retry loading the word list."""
    try:
        game_logger.log_user_action(request, 'reload_word_source')

        if not game_service.reload_word_source():
            return _word_source_unavailable('reload_word_source', message=game_service.load_error)

        response_data = {
            'success': True,
            'word_stats': game_service.word_statistics()
        }
        game_logger.log_server_response(request, 'reload_word_source', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        return _error_response('reload_word_source', e)


@game_bp.route('/health', methods=['GET'])
@require_game_service
def health_check(game_service):
    """Health check endpoint."""
    try:
        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy' if game_service.ready else 'degraded',
            'active_games': len(game_service.games),
            'word_source_ready': game_service.ready,
            'word_source_error': game_service.load_error,
            'word_stats': game_service.word_statistics(),
            'log_stats': game_logger.get_log_stats()
        }
        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        return jsonify({'status': 'error', 'error': str(e)}), 500
