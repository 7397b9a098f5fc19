from flask import Blueprint, current_app, jsonify, request

from cobra_duel.errors import RoomNotFound
from cobra_duel.models import ROOM_TYPES
from cobra_duel.services.broadcast import room_list_payload

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Cobra Duel game server!'})


@main.route('/api/rooms', methods=['GET'])
def list_rooms():
    """Read-only listing of the rooms of one type, given as ?type=."""
    room_type = request.args.get('type', '')
    if room_type not in ROOM_TYPES:
        return jsonify({'error': f'Unknown room type {room_type!r}'}), 400
    lobby = current_app.extensions['cobra_lobby']
    return jsonify(room_list_payload(room_type, lobby.list_rooms(room_type))), 200


@main.route('/api/rooms/<int:room_id>', methods=['GET'])
def get_room(room_id):
    lobby = current_app.extensions['cobra_lobby']
    try:
        return jsonify(lobby.snapshot(room_id)), 200
    except RoomNotFound as exc:
        return jsonify(exc.to_dict()), 404
