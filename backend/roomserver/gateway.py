from flask_socketio import SocketIO


class SocketIOGateway:
    """Outbound side of the Socket.IO transport used by the coordinator.

    Socket.IO session ids are the connection ids and room ids double as
    Socket.IO room names.
    """

    def __init__(self, socketio: SocketIO, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def _emit(self, event, payload, to=None):
        # Wrapped in a tuple so a None payload still goes out as an explicit null
        self.socketio.emit(event, (payload,), to=to, namespace=self.namespace)

    def send(self, connection, event, payload):
        self._emit(event, payload, to=connection)

    def to_room(self, room_id, event, payload):
        self._emit(event, payload, to=room_id)

    def to_all(self, event, payload):
        self._emit(event, payload)

    def enter(self, connection, room_id):
        self.socketio.server.enter_room(connection, room_id, namespace=self.namespace)

    def leave(self, connection, room_id):
        self.socketio.server.leave_room(connection, room_id, namespace=self.namespace)
