from datetime import timedelta

import pytest

from creative_arena.errors import BattleNotFound, DuplicateRecord, LeaderboardEntryNotFound
from creative_arena.models import utcnow


def _score_fields():
    return {
        'user_originality': 80, 'user_logic': 70, 'user_expression': 75,
        'ai_originality': 60, 'ai_logic': 65, 'ai_expression': 70,
        'judge_feedback': 'Nice.',
    }


def test_users(store):
    user = store.create_user('wren', 'guest')
    assert user.id is not None
    assert store.get_user(user.id).username == 'wren'
    assert store.get_user_by_username('wren').id == user.id
    assert store.get_user_by_username('nobody') is None
    with pytest.raises(DuplicateRecord):
        store.create_user('wren', 'guest')


def test_battle_mutations(store):
    user = store.create_user('xia', 'guest')
    battle = store.create_battle(prompt='Invent a sport', user_id=user.id, opponent_type='ai')
    assert battle.to_dict()['userSolution'] is None
    assert battle.to_dict()['completed'] is False

    store.update_battle(battle.id, user_solution='mine')
    store.update_battle(battle.id, ai_solution='theirs')
    done = store.update_battle(battle.id, user_score=225, ai_score=195, user_won=True, completed=True)
    assert done.to_dict()['userWon'] is True
    assert store.get_battle(battle.id).stage == 'completed'
    with pytest.raises(BattleNotFound):
        store.update_battle(999, completed=True)
    assert store.get_battle(999) is None


def test_list_completed_battles(store):
    a = store.create_user('yan', 'guest')
    b = store.create_user('zed', 'guest')
    first = store.create_battle(prompt='p', user_id=a.id, opponent_type='ai')
    second = store.create_battle(prompt='p', user_id=b.id, opponent_type='ai')
    store.create_battle(prompt='p', user_id=a.id, opponent_type='ai')
    store.update_battle(first.id, completed=True, created_at=utcnow() - timedelta(days=3))
    store.update_battle(second.id, completed=True)

    assert [x.id for x in store.list_completed_battles()] == [first.id, second.id]
    assert [x.id for x in store.list_completed_battles(user_id=a.id)] == [first.id]
    assert [x.id for x in store.list_completed_battles(since=utcnow() - timedelta(days=1))] == [second.id]


def test_one_score_per_battle(store):
    user = store.create_user('abe', 'guest')
    battle = store.create_battle(prompt='p', user_id=user.id, opponent_type='ai')
    score = store.create_score(battle.id, **_score_fields())
    assert store.get_score_by_battle_id(battle.id).id == score.id
    assert score.to_dict()['userOriginality'] == 80
    with pytest.raises(DuplicateRecord):
        store.create_score(battle.id, **_score_fields())
    assert store.get_score_by_battle_id(battle.id + 1) is None


def test_leaderboard_entries(store):
    user = store.create_user('bo', 'guest')
    entry = store.create_leaderboard_entry(user_id=user.id, username='bo', total_battles=1, wins=0, total_score=90)
    assert entry.to_dict()['winRate'] == 0
    with pytest.raises(DuplicateRecord):
        store.create_leaderboard_entry(user_id=user.id, username='bo', total_battles=1, wins=0, total_score=0)
    store.update_leaderboard_entry(user.id, total_battles=2, wins=1, total_score=300)
    data = store.get_leaderboard_entry(user.id).to_dict(current_username='bo')
    assert (data['totalBattles'], data['wins'], data['winRate'], data['avgScore']) == (2, 1, 50, 150)
    assert data['isCurrentUser'] is True
    assert len(store.list_leaderboard_entries()) == 1


def test_update_missing_leaderboard_entry(store):
    user = store.create_user('cy', 'guest')
    with pytest.raises(LeaderboardEntryNotFound):
        store.update_leaderboard_entry(user.id, wins=1)
    assert store.get_leaderboard_entry(user.id) is None
