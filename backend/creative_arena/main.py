from flask import Blueprint, request, jsonify, current_app
from werkzeug.exceptions import HTTPException

from creative_arena.errors import ArenaError

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Creative Arena battle server!'})


@main.route('/api/health')
def health():
    cfg = current_app.config
    lifecycle = current_app.extensions['battle_lifecycle']
    return jsonify({
        'status': 'ok',
        'generationMode': 'live' if lifecycle.judge.client is not None else 'degraded',
        'storage': cfg.get('STORAGE_BACKEND'),
    })


@main.route('/api/users', methods=['POST'])
def get_or_create_user():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Invalid request'}), 400
    username = data.get('username')
    if not isinstance(username, str) or not username.strip():
        return jsonify({'error': 'Invalid request'}), 400
    user, created = current_app.extensions['battle_lifecycle'].get_or_create_user(username.strip())
    return jsonify(user.to_dict()), 201 if created else 200


@main.app_errorhandler(ArenaError)
def handle_arena_error(exc):
    return jsonify({'error': exc.message}), exc.status_code


@main.app_errorhandler(HTTPException)
def handle_http_error(exc):
    return jsonify({'error': exc.description}), exc.code


@main.app_errorhandler(Exception)
def handle_unexpected_error(exc):
    current_app.logger.exception(f"[error] {request.method} {request.path}")
    return jsonify({'error': 'Internal server error'}), 500
