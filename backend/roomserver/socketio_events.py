from flask import current_app, request

from roomserver import socketio
from roomserver.coordinator import CreateRoom, Disconnect, ExitRoom, JoinRoom, Login, MakeMove


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _coordinator():
    return current_app.extensions['room_coordinator']


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] conn={_get_sid()}")
    # Clients that have not logged in yet still see the lobby
    socketio.emit('rooms', (_coordinator().rooms_snapshot(),), to=_get_sid(), namespace=request.namespace)


def handle_disconnect(*args):
    _coordinator().dispatch(Disconnect(_get_sid()))


def handle_login(name=None):
    _coordinator().dispatch(Login(_get_sid(), name))


def handle_create_room(room_name=None):
    _coordinator().dispatch(CreateRoom(_get_sid(), room_name))


def handle_join_room(room_id=None):
    _coordinator().dispatch(JoinRoom(_get_sid(), room_id))


def handle_make_move(data=None):
    data = data if isinstance(data, dict) else {}
    _coordinator().dispatch(MakeMove(_get_sid(), data.get('roomId'), data.get('index')))


def handle_exit_room(room_id=None):
    _coordinator().dispatch(ExitRoom(_get_sid(), room_id))


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Event names match what the browser client emits.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('login', handle_login, namespace=namespace)
    socketio.on_event('createRoom', handle_create_room, namespace=namespace)
    socketio.on_event('joinRoom', handle_join_room, namespace=namespace)
    socketio.on_event('makeMove', handle_make_move, namespace=namespace)
    socketio.on_event('exitRoom', handle_exit_room, namespace=namespace)
