import json
from functools import wraps

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from cobra_duel.errors import GameError, InvalidPayload
from cobra_duel.models import DIRECTIONS, ROOM_TYPES
from cobra_duel.services.broadcast import room_list_payload


def _lobby():
    return current_app.extensions['cobra_lobby']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def reports_errors(event: str):
    """Send GameErrors back to the calling connection as an 'error' event."""
    def decorator(handler):
        @wraps(handler)
        def wrapper(*args):
            try:
                return handler(*args)
            except GameError as exc:
                current_app.logger.info(f"[error] event={event} sid={_get_sid()} code={exc.code} message={exc.message}")
                emit('error', exc.to_dict(event))
        return wrapper
    return decorator


# ---- payload parsing ----

def _text(data, field: str) -> str:
    if not isinstance(data, str) or not data.strip():
        raise InvalidPayload(f"{field} must be a non-empty string")
    return data.strip()


def _room_type(data) -> str:
    if data not in ROOM_TYPES:
        raise InvalidPayload(f"Room type must be one of {', '.join(ROOM_TYPES)}")
    return data


def _room_request(data):
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except ValueError:
            raise InvalidPayload('Room payload is not valid JSON')
    if not isinstance(data, dict):
        raise InvalidPayload('Room payload must be an object with name and type')
    return _text(data.get('name'), 'name'), _room_type(data.get('type'))


def _room_id(data) -> int:
    if isinstance(data, bool):
        raise InvalidPayload('Room id must be an integer')
    try:
        return int(data)
    except (TypeError, ValueError):
        raise InvalidPayload('Room id must be an integer')


def _direction(data) -> str:
    if data not in DIRECTIONS:
        raise InvalidPayload(f"Direction must be one of {', '.join(DIRECTIONS)}")
    return data


# ---- handlers ----

def handle_connect():
    emit('connected', {'message': 'Connected', 'sid': _get_sid()})


def handle_disconnect(*args):
    departure = _lobby().logout(_get_sid())
    if departure:
        leave_room(f"room:{departure.room_id}")


@reports_errors('login')
def handle_login(data=None):
    nickname = _text(data, 'nickname')
    try:
        _lobby().login(_get_sid(), nickname)
    except GameError as exc:
        emit('login', {'success': False, 'nickname': nickname, 'error': exc.code})
        return
    emit('login', {'success': True, 'nickname': nickname})


def handle_logout(data=None):
    departure = _lobby().logout(_get_sid())
    if departure:
        leave_room(f"room:{departure.room_id}")
    emit('logout', {'success': True})


@reports_errors('listRoomsByType')
def handle_list_rooms(data=None):
    room_type = _room_type(data)
    emit('roomList', room_list_payload(room_type, _lobby().list_rooms(room_type)))


@reports_errors('createRoom')
def handle_create_room(data=None):
    name, room_type = _room_request(data)
    room = _lobby().create_room(_get_sid(), name, room_type)
    join_room(room.group)
    emit('joinRoom', room.to_dict())


@reports_errors('joinRoom')
def handle_join_room(data=None):
    room = _lobby().join_room(_get_sid(), _room_id(data))
    join_room(room.group)
    emit('joinRoom', room.to_dict())


@reports_errors('leaveRoom')
def handle_leave_room(data=None):
    departure = _lobby().leave_room(_get_sid())
    leave_room(f"room:{departure.room_id}")
    emit('leaveRoom', {'success': True, 'room_id': departure.room_id})


@reports_errors('setReady')
def handle_set_ready(data=None):
    _lobby().set_ready(_get_sid())


@reports_errors('move')
def handle_move(data=None):
    _lobby().move(_get_sid(), _direction(data))


@reports_errors('pause')
def handle_pause(data=None):
    _lobby().pause(_get_sid())


@reports_errors('unpause')
def handle_unpause(data=None):
    _lobby().unpause(_get_sid())


HANDLERS = {
    'connect': handle_connect,
    'disconnect': handle_disconnect,
    'login': handle_login,
    'logout': handle_logout,
    'listRoomsByType': handle_list_rooms,
    'createRoom': handle_create_room,
    'joinRoom': handle_join_room,
    'leaveRoom': handle_leave_room,
    'setReady': handle_set_ready,
    'move': handle_move,
    'pause': handle_pause,
    'unpause': handle_unpause,
}


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register every Socket.IO event handler on ``namespace``."""
    from cobra_duel import socketio

    for event, handler in HANDLERS.items():
        socketio.on_event(event, handler, namespace=namespace)
