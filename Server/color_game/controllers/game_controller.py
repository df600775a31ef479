"""
Game Controller

Handles all game-related HTTP endpoints.
"""

import uuid
from dataclasses import asdict
from flask import Blueprint, request, jsonify, current_app
from ..config.game_settings import BASE_PALETTE, NAMED_COLORS, get_palette_statistics
from ..models.errors import InvalidColorFormat
from ..services.game_service import get_game_service
from ..services.listeners import SocketIOListener, game_room
from ..utils.game_logger import game_logger
from ..utils.helpers import key_to_option_index

game_bp = Blueprint('game', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _game_not_found(action, game_id):
    error_response = {
        'success': False,
        'error': 'Game not found'
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 404


def _bad_request(action, message, game_id=None, **kwargs):
    error_response = {
        'success': False,
        'error': message
    }
    game_logger.log_server_response(request, action, False, error_response, game_id, **kwargs)
    return jsonify(error_response), 400


def _action_response(action, game_id, result):
    """Build the response for a handled command: its result plus fresh state."""
    state = get_game_service().get_game_state(game_id)
    response_data = {
        'success': True,
        'result': result.to_dict(),
        'state': asdict(state)
    }
    game_logger.log_server_response(
        request, action, True, response_data, game_id,
        outcome=result.outcome.value, score=state.score, game_over=state.game_over
    )
    return jsonify(response_data)


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return _bad_request('new_game', 'Request body must be a JSON object')

        # Log user action
        game_logger.log_user_action(request, 'new_game', extra_data=data)

        game_id = str(uuid.uuid4())
        listener = None
        socketio = getattr(current_app, 'socketio', None)
        if socketio is not None:
            listener = SocketIOListener(socketio, game_room(game_id))

        try:
            game_service.create_new_game(data, listener=listener, game_id=game_id)
        except ValueError as e:
            return _bad_request('new_game', str(e))

        state = game_service.get_game_state(game_id)
        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            policy=state.policy, max_lives=state.max_lives
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/state', methods=['GET'])
def get_state(game_id):
    """Get current game state."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)
        if state is None:
            return _game_not_found('get_state', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            round=state.round_number, game_over=state.game_over
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
def make_guess(game_id):
    """Submit a guess, either as a color or as a number key 1-6."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True)
        if not isinstance(data, dict) or ('color' not in data and 'key' not in data):
            return _bad_request('guess', 'Color or key is required', game_id)

        game_logger.log_user_action(
            request, 'guess', game_id,
            color=data.get('color'), key=data.get('key')
        )

        if game_service.get_session(game_id) is None:
            return _game_not_found('guess', game_id)

        if 'color' in data:
            try:
                result = game_service.submit_guess(game_id, data['color'])
            except InvalidColorFormat as e:
                return _bad_request('guess', str(e), game_id, attempted_color=data['color'])
        else:
            index = key_to_option_index(data['key'])
            if index is None:
                return _bad_request('guess', 'Key must be one of 1-6', game_id,
                                    attempted_key=data['key'])
            result = game_service.submit_guess_by_index(game_id, index)

        if result is None:
            return _game_not_found('guess', game_id)

        return _action_response('guess', game_id, result)

    except Exception as e:
        game_logger.log_error(request, e, 'guess', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'guess', False, error_response, game_id)
        return jsonify(error_response), 500


def _assist(action, game_id, command):
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, action, game_id)

        result = command(game_service, game_id)
        if result is None:
            return _game_not_found(action, game_id)

        return _action_response(action, game_id, result)

    except Exception as e:
        game_logger.log_error(request, e, action, game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, action, False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/hint', methods=['POST'])
def request_hint(game_id):
    """Spend a hint."""
    return _assist('hint', game_id, lambda service, gid: service.request_hint(gid))


@game_bp.route('/game/<game_id>/help', methods=['POST'])
def request_help(game_id):
    """Spend a help charge to eliminate a wrong option."""
    return _assist('help', game_id, lambda service, gid: service.request_help(gid))


@game_bp.route('/game/<game_id>/reset', methods=['POST'])
def reset_game(game_id):
    """Restart an existing session with full lives, hints and help."""
    return _assist('reset', game_id, lambda service, gid: service.request_new_game(gid))


@game_bp.route('/game/<game_id>', methods=['DELETE'])
def delete_game(game_id):
    """Delete a game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)
            return jsonify(response_data)

        response_data['error'] = 'Game not found'
        return jsonify(response_data), 404

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'delete_game', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/palette', methods=['GET'])
def get_palette():
    """Base palette and named colors used by the game."""
    return jsonify({
        'success': True,
        'base_palette': list(BASE_PALETTE),
        'named_colors': {name: hex_value for hex_value, name in NAMED_COLORS.items()},
        'statistics': get_palette_statistics()
    })


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        log_stats = game_logger.get_log_stats()

        response_data = {
            'status': 'healthy' if game_service else 'degraded',
            'active_games': len(game_service.games) if game_service else 0,
            'log_stats': log_stats
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
