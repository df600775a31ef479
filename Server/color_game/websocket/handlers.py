"""
WebSocket Event Handlers

Socket.IO front door to the game service. Game updates are pushed to the
game's room by the session's SocketIOListener; each handled command also
answers the caller with a game_state_update.
"""

import uuid
from dataclasses import asdict
from flask_socketio import emit, join_room, leave_room
from ..models.errors import InvalidColorFormat
from ..services.game_service import get_game_service
from ..services.listeners import SocketIOListener, game_room
from ..utils.game_logger import game_logger
from ..utils.helpers import key_to_option_index


def _payload_or_error(data, allow_empty=False):
    """Return the event payload as a dict, or emit an error and return None."""
    if data is None and allow_empty:
        return {}
    if not isinstance(data, dict):
        emit('error', {'error': 'Invalid payload'})
        return None
    return data


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def _session_or_error(data):
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return None, None

        game_id = data.get('game_id')
        if not game_id:
            emit('error', {'error': 'Game ID is required'})
            return None, None

        if game_service.get_session(game_id) is None:
            emit('error', {'error': 'Game not found'})
            return None, None

        return game_service, game_id

    def _reply(game_service, game_id, result):
        state = game_service.get_game_state(game_id)
        emit('game_state_update', {
            'success': True,
            'result': result.to_dict() if result else None,
            'state': asdict(state) if state else None
        })

    @socketio.on('create_game')
    def handle_create_game(data=None):
        """Create a game and subscribe the caller to its room."""
        try:
            overrides = _payload_or_error(data, allow_empty=True)
            if overrides is None:
                return

            game_service = get_game_service()
            if not game_service:
                emit('error', {'error': 'Game service unavailable'})
                return

            game_id = str(uuid.uuid4())
            room = game_room(game_id)
            join_room(room)
            try:
                game_service.create_new_game(
                    overrides, listener=SocketIOListener(socketio, room), game_id=game_id
                )
            except ValueError as e:
                leave_room(room)
                emit('error', {'error': str(e)})
                return

            game_logger.logger.info(f"WebSocket: created game {game_id}")
            emit('game_created', {
                'success': True,
                'game_id': game_id,
                'state': asdict(game_service.get_game_state(game_id))
            })

        except Exception as e:
            game_logger.log_error(None, e, 'ws_create_game')
            emit('error', {'error': str(e)})

    @socketio.on('join_game')
    def handle_join_game(data=None):
        """Subscribe to an existing game's updates."""
        try:
            data = _payload_or_error(data)
            if data is None:
                return

            game_service, game_id = _session_or_error(data)
            if not game_service:
                return

            room = game_room(game_id)
            join_room(room)
            session = game_service.get_session(game_id)
            if not isinstance(session.listener, SocketIOListener):
                game_service.set_listener(game_id, SocketIOListener(socketio, room))

            game_logger.logger.info(f"WebSocket: client joined game {game_id}")
            emit('game_state_update', {
                'success': True,
                'result': None,
                'state': asdict(game_service.get_game_state(game_id))
            })

        except Exception as e:
            game_logger.log_error(None, e, 'ws_join_game')
            emit('error', {'error': str(e)})

    @socketio.on('leave_game')
    def handle_leave_game(data=None):
        """Stop receiving a game's updates."""
        try:
            data = _payload_or_error(data)
            if data is None:
                return

            game_id = data.get('game_id')
            if not game_id:
                emit('error', {'error': 'Game ID is required'})
                return
            leave_room(game_room(game_id))

        except Exception as e:
            game_logger.log_error(None, e, 'ws_leave_game')
            emit('error', {'error': str(e)})

    @socketio.on('guess')
    def handle_guess(data=None):
        """Guess by color, or by number key 1-6."""
        data = _payload_or_error(data)
        if data is None:
            return

        game_service, game_id = _session_or_error(data)
        if not game_service:
            return

        try:
            if 'color' in data:
                result = game_service.submit_guess(game_id, data['color'])
            elif 'key' in data:
                index = key_to_option_index(data['key'])
                if index is None:
                    emit('error', {'error': 'Key must be one of 1-6'})
                    return
                result = game_service.submit_guess_by_index(game_id, index)
            else:
                emit('error', {'error': 'Color or key is required'})
                return
        except InvalidColorFormat as e:
            emit('error', {'error': str(e)})
            return
        except Exception as e:
            game_logger.log_error(None, e, 'ws_guess', game_id)
            emit('error', {'error': str(e)})
            return

        _reply(game_service, game_id, result)

    def _register_command(event, action, command):
        def handler(data=None):
            data = _payload_or_error(data)
            if data is None:
                return

            game_service, game_id = _session_or_error(data)
            if not game_service:
                return
            try:
                result = command(game_service, game_id)
            except Exception as e:
                game_logger.log_error(None, e, action, game_id)
                emit('error', {'error': str(e)})
                return
            _reply(game_service, game_id, result)

        handler.__name__ = f"handle_{event}"
        socketio.on_event(event, handler)

    _register_command('request_hint', 'ws_hint',
                      lambda service, gid: service.request_hint(gid))
    _register_command('request_help', 'ws_help',
                      lambda service, gid: service.request_help(gid))
    _register_command('request_new_game', 'ws_new_game',
                      lambda service, gid: service.request_new_game(gid))
