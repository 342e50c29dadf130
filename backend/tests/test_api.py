import pytest


LONG_SOLUTION = (
    "A rooftop garden network where every building shares rainwater and seeds through small drones, "
    "turning the skyline into one connected farm."
)


def _new_battle(client, **body):
    res = client.post('/api/battles', json=body or {'opponentType': 'ai'})
    assert res.status_code == 201
    return res.get_json()


def test_create_battle(client):
    battle = _new_battle(client, opponentType='ai')
    assert battle['completed'] is False
    assert battle['userSolution'] is None
    assert battle['aiSolution'] is None
    assert battle['opponentType'] == 'ai'
    assert battle['prompt']
    assert battle['createdAt']


def test_create_battle_defaults_invalid_opponent_type(client):
    assert _new_battle(client, opponentType='robot')['opponentType'] == 'ai'
    assert client.post('/api/battles').get_json()['opponentType'] == 'ai'


def test_create_battle_accepts_human_opponent(client):
    battle = _new_battle(client, opponentType='human', username='Hana')
    assert battle['opponentType'] == 'human'
    assert client.post(f"/api/battles/{battle['id']}/submit", json={'solution': LONG_SOLUTION}).status_code == 200
    results = client.get(f"/api/battles/{battle['id']}/results").get_json()
    assert results['battle']['aiSolution']


def test_get_battle(client):
    battle = _new_battle(client)
    res = client.get(f"/api/battles/{battle['id']}")
    assert res.status_code == 200
    assert res.get_json()['prompt'] == battle['prompt']


def test_get_missing_battle_is_404(client):
    res = client.get('/api/battles/999999')
    assert res.status_code == 404
    assert 'error' in res.get_json()


def test_non_numeric_battle_id_is_404(client):
    assert client.get('/api/battles/abc').status_code == 404


def test_short_submission_rejected_and_battle_unchanged(client):
    battle = _new_battle(client)
    res = client.post(f"/api/battles/{battle['id']}/submit", json={'solution': 'x' * 9})
    assert res.status_code == 400
    after = client.get(f"/api/battles/{battle['id']}").get_json()
    assert after['userSolution'] is None
    assert after['completed'] is False


def test_submission_requires_solution_field(client):
    battle = _new_battle(client)
    assert client.post(f"/api/battles/{battle['id']}/submit", json={}).status_code == 400
    assert client.post(f"/api/battles/{battle['id']}/submit", json={'solution': 42}).status_code == 400


def test_submit_and_fetch_results(client):
    battle = _new_battle(client)
    res = client.post(f"/api/battles/{battle['id']}/submit", json={'solution': LONG_SOLUTION})
    assert res.status_code == 200
    assert res.get_json() == {'success': True}

    res = client.get(f"/api/battles/{battle['id']}/results")
    assert res.status_code == 200
    data = res.get_json()
    done, scores = data['battle'], data['scores']
    assert done['completed'] is True
    assert done['userSolution'] == LONG_SOLUTION
    assert done['aiSolution']
    assert done['userWon'] in (True, False)
    assert done['userScore'] == scores['userOriginality'] + scores['userLogic'] + scores['userExpression']
    assert done['aiScore'] == scores['aiOriginality'] + scores['aiLogic'] + scores['aiExpression']
    assert scores['battleId'] == battle['id']
    assert scores['judgeFeedback']
    for key in ('userOriginality', 'userLogic', 'userExpression', 'aiOriginality', 'aiLogic', 'aiExpression'):
        assert 0 <= scores[key] <= 100


def test_fifteen_character_solution_completes(client):
    battle = _new_battle(client)
    res = client.post(f"/api/battles/{battle['id']}/submit", json={'solution': 'a' * 15})
    assert res.status_code == 200
    data = client.get(f"/api/battles/{battle['id']}/results").get_json()
    assert data['battle']['completed'] is True
    assert data['battle']['userScore'] is not None
    assert data['battle']['aiScore'] is not None
    assert data['battle']['userWon'] in (True, False)
    assert data['scores']['judgeFeedback']


def test_solution_below_judge_threshold_loses(client):
    battle = _new_battle(client)
    client.post(f"/api/battles/{battle['id']}/submit", json={'solution': 'short idea here'})
    data = client.get(f"/api/battles/{battle['id']}/results").get_json()
    assert data['battle']['userWon'] is False
    assert 40 <= data['scores']['userOriginality'] <= 64
    assert 'insufficient detail' in data['scores']['judgeFeedback']


def test_submit_to_completed_battle_rejected(client):
    battle = _new_battle(client)
    client.post(f"/api/battles/{battle['id']}/submit", json={'solution': LONG_SOLUTION})
    res = client.post(f"/api/battles/{battle['id']}/submit", json={'solution': LONG_SOLUTION})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Battle already completed'


def test_submit_to_missing_battle_rejected(client):
    res = client.post('/api/battles/999999/submit', json={'solution': LONG_SOLUTION})
    assert res.status_code == 400


def test_results_before_completion(client):
    battle = _new_battle(client)
    assert client.get(f"/api/battles/{battle['id']}/results").status_code == 400
    assert client.get('/api/battles/999999/results').status_code == 404


def test_submit_internal_error_is_500(client, lifecycle, monkeypatch):
    battle = _new_battle(client)

    def explode(prompt):
        raise RuntimeError('boom')

    monkeypatch.setattr(lifecycle.opponent, 'solve', explode)
    res = client.post(f"/api/battles/{battle['id']}/submit", json={'solution': LONG_SOLUTION})
    assert res.status_code == 500
    # The challenger's answer was already persisted and is not rolled back
    after = client.get(f"/api/battles/{battle['id']}").get_json()
    assert after['userSolution'] == LONG_SOLUTION
    assert after['completed'] is False


def test_win_and_loss_roll_into_leaderboard(client, lifecycle):
    lifecycle.judge.challenger_win_probability = 1.0
    first = _new_battle(client, opponentType='ai', username='dana')
    assert client.post(f"/api/battles/{first['id']}/submit", json={'solution': LONG_SOLUTION}).status_code == 200
    second = _new_battle(client, opponentType='ai', username='dana')
    assert client.post(f"/api/battles/{second['id']}/submit", json={'solution': 'tiny answer'}).status_code == 200
    assert first['userId'] == second['userId']

    res = client.get('/api/leaderboard/all-time?username=dana')
    assert res.status_code == 200
    [entry] = [e for e in res.get_json() if e['username'] == 'dana']
    assert entry['totalBattles'] == 2
    assert entry['wins'] == 1
    assert entry['winRate'] == 50
    assert entry['isCurrentUser'] is True


def test_leaderboard_ranks_by_average_score(client, lifecycle):
    lifecycle.judge.challenger_win_probability = 1.0
    strong = _new_battle(client, username='strong')
    client.post(f"/api/battles/{strong['id']}/submit", json={'solution': LONG_SOLUTION})
    weak = _new_battle(client, username='weak')
    client.post(f"/api/battles/{weak['id']}/submit", json={'solution': 'tiny answer'})

    entries = client.get('/api/leaderboard/weekly?username=weak').get_json()
    assert [e['username'] for e in entries] == ['strong', 'weak']
    assert entries[0]['avgScore'] >= entries[1]['avgScore']
    assert [e['isCurrentUser'] for e in entries] == [False, True]


def test_leaderboard_unknown_period(client):
    assert client.get('/api/leaderboard/daily').status_code == 400


def test_leaderboard_without_username_marks_nobody(client):
    battle = _new_battle(client, username='erin')
    client.post(f"/api/battles/{battle['id']}/submit", json={'solution': LONG_SOLUTION})
    entries = client.get('/api/leaderboard/all-time').get_json()
    assert entries and not any(e['isCurrentUser'] for e in entries)


def test_users_get_or_create(client):
    res = client.post('/api/users', json={'username': 'frank'})
    assert res.status_code == 201
    user = res.get_json()
    assert user['username'] == 'frank'
    assert 'password_hash' not in user
    again = client.post('/api/users', json={'username': 'frank'})
    assert again.status_code == 200
    assert again.get_json()['id'] == user['id']


def test_users_requires_username(client):
    assert client.post('/api/users', json={}).status_code == 400
    assert client.post('/api/users', json={'username': '   '}).status_code == 400


def test_guest_battles_get_unique_players(client):
    first = _new_battle(client, opponentType='ai')
    second = _new_battle(client, opponentType='ai', username='Guest')
    assert first['userId'] != second['userId']


def test_health(client):
    data = client.get('/api/health').get_json()
    assert data['status'] == 'ok'
    assert data['generationMode'] == 'degraded'


@pytest.mark.parametrize('body', [['ai'], 'ai', 42])
def test_non_object_body_rejected(client, body):
    assert client.post('/api/battles', json=body).status_code == 400
    assert client.post('/api/users', json=body).status_code == 400


@pytest.mark.parametrize('body', [['x' * 20], 'x' * 20, None])
def test_submit_non_object_body_rejected(client, body):
    battle = _new_battle(client)
    res = client.post(f"/api/battles/{battle['id']}/submit", json=body)
    assert res.status_code == 400
    assert client.get(f"/api/battles/{battle['id']}").get_json()['userSolution'] is None


def test_overlong_username_rejected(client):
    name = 'n' * 65
    res = client.post('/api/users', json={'username': name})
    assert res.status_code == 400
    assert 'error' in res.get_json()
    assert client.post('/api/battles', json={'username': name}).status_code == 400
    assert client.post('/api/users', json={'username': 'n' * 64}).status_code == 201
