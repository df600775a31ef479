"""
Renderer Listeners

The view layer receives game updates through a GameListener. The base class
ignores everything; SocketIOListener forwards each update to a Socket.IO room.
"""

from typing import List

from ..models.color import Color


class GameListener:
    """Core-to-renderer contract. Override the notifications you care about."""

    def on_target_changed(self, color: Color) -> None:
        pass

    def on_options_changed(self, colors: List[Color]) -> None:
        pass

    def on_score_changed(self, score: int) -> None:
        pass

    def on_lives_changed(self, remaining: int, maximum: int) -> None:
        pass

    def on_hints_changed(self, remaining: int) -> None:
        pass

    def on_help_changed(self, remaining: int) -> None:
        pass

    def on_option_eliminated(self, index: int) -> None:
        pass

    def on_status(self, message: str, severity: str) -> None:
        pass

    def on_game_over(self, final_score: int) -> None:
        pass


class SocketIOListener(GameListener):
    """Pushes game updates to every client in a game's Socket.IO room."""

    def __init__(self, socketio, room: str):
        self.socketio = socketio
        self.room = room

    def _emit(self, event: str, data: dict) -> None:
        self.socketio.emit(event, data, room=self.room)

    def on_target_changed(self, color):
        self._emit('target_changed', {'color': color.hex})

    def on_options_changed(self, colors):
        self._emit('options_changed', {'colors': [c.hex for c in colors]})

    def on_score_changed(self, score):
        self._emit('score_changed', {'score': score})

    def on_lives_changed(self, remaining, maximum):
        self._emit('lives_changed', {'remaining': remaining, 'maximum': maximum})

    def on_hints_changed(self, remaining):
        self._emit('hints_changed', {'remaining': remaining})

    def on_help_changed(self, remaining):
        self._emit('help_changed', {'remaining': remaining})

    def on_option_eliminated(self, index):
        self._emit('option_eliminated', {'index': index})

    def on_status(self, message, severity):
        self._emit('status', {'message': message, 'severity': severity})

    def on_game_over(self, final_score):
        self._emit('game_over', {'final_score': final_score})


def game_room(game_id: str) -> str:
    """Socket.IO room name for a game."""
    return f"game_{game_id}"
