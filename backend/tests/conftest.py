import logging
import os
import random
import sys
import pytest

# Ensure the backend root (containing the `cobra_duel` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from cobra_duel import create_app, socketio
from cobra_duel.services.games.scheduler import ManualTimers
from cobra_duel.services.lobby import GameLobby

NAMESPACE = '/ws'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:5173']
    SOCKETIO_NAMESPACE = NAMESPACE
    SOCKETIO_ASYNC_MODE = 'threading'
    LOG_LEVEL = 'DEBUG'


class RecordingBroadcaster:
    """Stands in for Socket.IO, keeping every broadcast for inspection."""

    def __init__(self):
        self.sent = []

    def room_list(self, room_type, rooms):
        self.sent.append(('roomList', room_type, [r.to_dict() for r in rooms]))

    def game_update(self, room):
        self.sent.append(('gameUpdate', room.id, room.to_dict()))

    def game_over(self, room, won):
        self.sent.append(('winGame' if won else 'loseGame', room.id, room.to_dict()))

    def names(self):
        return [entry[0] for entry in self.sent]

    def clear(self):
        self.sent.clear()


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def app_lobby(flask_app):
    return flask_app.extensions['cobra_lobby']


@pytest.fixture()
def sio_factory(flask_app):
    """Connect Socket.IO test clients; each is disconnected at teardown."""
    clients = []

    def _connect():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace=NAMESPACE,
        )
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        if test_client.is_connected(NAMESPACE):
            test_client.disconnect(namespace=NAMESPACE)


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def lobby(broadcaster):
    logger = logging.getLogger('cobra_duel.tests')
    timers = ManualTimers(logger)
    return GameLobby(broadcaster, timers, logger, rng=random.Random(7))


@pytest.fixture()
def running_room(lobby, broadcaster):
    """A started two-player 'separate' room; returns (room, sid_one, sid_two)."""
    lobby.login('sid-1', 'alice')
    lobby.login('sid-2', 'bob')
    room = lobby.create_room('sid-1', 'A', 'separate')
    lobby.join_room('sid-2', room.id)
    lobby.set_ready('sid-1')
    lobby.set_ready('sid-2')
    broadcaster.clear()
    return room, 'sid-1', 'sid-2'


def received(test_client, name=None):
    """Drain a test client's queue, optionally keeping only one event name."""
    packets = test_client.get_received(NAMESPACE)
    if name is None:
        return packets
    return [pkt['args'][0] for pkt in packets if pkt['name'] == name]
