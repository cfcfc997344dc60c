import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    # Comma separated list; '*' allows any origin
    CORS_ALLOWED_ORIGINS = os.environ.get('CORS_ALLOWED_ORIGINS', '*')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Rooms are kept after their last player leaves; cap the total instead
    MAX_ROOMS = int(os.environ.get('MAX_ROOMS', '100'))
    PRUNE_EMPTY_ROOMS = os.environ.get('PRUNE_EMPTY_ROOMS', 'false').lower() in ('1', 'true', 'yes')
    MAX_NAME_LENGTH = int(os.environ.get('MAX_NAME_LENGTH', '32'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
