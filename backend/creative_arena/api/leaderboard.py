from flask import Blueprint, jsonify, request, current_app

leaderboard_bp = Blueprint('leaderboard', __name__)


@leaderboard_bp.route('/<string:period>', methods=['GET'])
def get_leaderboard(period):
    username = request.args.get('username') or None
    entries = current_app.extensions['leaderboard'].ranked_view(period, requesting_username=username)
    return jsonify(entries)
