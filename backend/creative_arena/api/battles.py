from flask import Blueprint, jsonify, request, current_app

from creative_arena.errors import ArenaError, BattleNotFound
from creative_arena.models import OPPONENT_AI

battles = Blueprint('battles', __name__)


def _lifecycle():
    return current_app.extensions['battle_lifecycle']


@battles.route('', methods=['POST'])
def create_battle():
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    opponent_type = data.get('opponentType') or OPPONENT_AI
    username = data.get('username')
    if username is not None and not isinstance(username, str):
        username = None
    try:
        battle = _lifecycle().create_battle(opponent_type=opponent_type, username=username)
    except ArenaError:
        raise
    except Exception:
        current_app.logger.exception("[battle-create] failed")
        return jsonify({'error': 'Failed to create battle'}), 500
    return jsonify(battle.to_dict()), 201


@battles.route('/<int:battle_id>', methods=['GET'])
def get_battle(battle_id):
    battle = _lifecycle().get_battle(battle_id)
    return jsonify(battle.to_dict())


@battles.route('/<int:battle_id>/submit', methods=['POST'])
def submit_solution(battle_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    solution = data.get('solution')
    min_length = int(current_app.config.get('MIN_SUBMISSION_LENGTH', 10))
    if not isinstance(solution, str) or len(solution) < min_length:
        return jsonify({'error': f'Solution must be at least {min_length} characters'}), 400

    try:
        _lifecycle().submit_solution(battle_id, solution)
    except BattleNotFound as exc:
        return jsonify({'error': exc.message}), 400
    except ArenaError:
        raise
    except Exception:
        current_app.logger.exception(f"[battle-submit] battle={battle_id} failed")
        return jsonify({'error': 'Failed to submit solution'}), 500
    return jsonify({'success': True})


@battles.route('/<int:battle_id>/results', methods=['GET'])
def get_results(battle_id):
    battle, score = _lifecycle().get_results(battle_id)
    return jsonify({'battle': battle.to_dict(), 'scores': score.to_dict()})
