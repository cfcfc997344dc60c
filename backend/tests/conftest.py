import os
import sys
from collections import defaultdict

import pytest

# Ensure the backend root (containing the `roomserver` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from roomserver import create_app, socketio
from roomserver.coordinator import RoomCoordinator
from roomserver.services.rooms import RoomStore


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    MAX_ROOMS = 10
    MAX_NAME_LENGTH = 32
    PRUNE_EMPTY_ROOMS = False
    LOG_LEVEL = 'DEBUG'


class RecordingGateway:
    """Stands in for Socket.IO: tracks room membership and who got what."""

    def __init__(self):
        self.members = defaultdict(list)
        self.deliveries = []

    def send(self, connection, event, payload):
        self.deliveries.append((connection, event, payload))

    def to_room(self, room_id, event, payload):
        for connection in list(self.members[room_id]):
            self.deliveries.append((connection, event, payload))

    def to_all(self, event, payload):
        self.deliveries.append(('*', event, payload))

    def enter(self, connection, room_id):
        if connection not in self.members[room_id]:
            self.members[room_id].append(connection)

    def leave(self, connection, room_id):
        if connection in self.members[room_id]:
            self.members[room_id].remove(connection)

    def events_for(self, connection, event):
        return [p for (to, name, p) in self.deliveries if name == event and to in (connection, '*')]

    def last(self, connection, event):
        found = self.events_for(connection, event)
        return found[-1] if found else None

    def clear(self):
        self.deliveries = []


@pytest.fixture()
def gateway():
    return RecordingGateway()


@pytest.fixture()
def coordinator(gateway):
    return RoomCoordinator(gateway, store=RoomStore(max_rooms=10))


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, namespace='/')
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected('/'):
                test_client.disconnect(namespace='/')
        except Exception:
            pass
