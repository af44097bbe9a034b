from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the name pick game server!'})


@main.route('/api/game/state', methods=['GET'])
def get_game_state():
    """
    Returns the live session for an admin view that was reloaded.
    """
    session = current_app.extensions['game_session']
    return jsonify(session.snapshot())
