import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def _allowed_origins(value):
    if not value or value == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    origins = _allowed_origins(flask_app.config.get('CORS_ALLOWED_ORIGINS', '*'))
    CORS(flask_app, origins=origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')

    # One coordinator per app; it owns every room and logged-in user
    from roomserver.coordinator import RoomCoordinator
    from roomserver.gateway import SocketIOGateway
    flask_app.extensions['room_coordinator'] = RoomCoordinator.from_config(
        SocketIOGateway(socketio, namespace), flask_app.config
    )

    from roomserver.main import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers
    from roomserver.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace)

    flask_app.logger.info(f"[startup] namespace={namespace} max_rooms={flask_app.config.get('MAX_ROOMS')}")
    return flask_app
