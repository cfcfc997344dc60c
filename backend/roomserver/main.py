from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


def _coordinator():
    return current_app.extensions['room_coordinator']


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the tic-tac-toe room server!'})


@main.route('/api/rooms')
def list_rooms():
    return jsonify(_coordinator().rooms_snapshot())


@main.route('/api/health')
def health():
    coordinator = _coordinator()
    return jsonify({
        'status': 'ok',
        'rooms': len(coordinator.store),
        'users': len(coordinator.identity),
    })
