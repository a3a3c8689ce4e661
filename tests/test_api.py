"""
Test suite for the Treeguessr HTTP API.
"""

import json
from pathlib import Path

import pytest


def start_game(client, **body):
    response = client.post('/api/new_game', json=body)
    assert response.status_code == 200
    return response.get_json()


def test_index_serves_client(client):
    response = client.get('/')
    assert response.status_code == 200
    assert b'Treeguessr' in response.data


def test_new_game(client):
    data = start_game(client)
    assert data['success'] is True
    assert 'game_id' in data

    state = data['state']
    assert state['state'] == 'playing'
    assert state['score'] == 100
    assert state['attempts_remaining'] == 5
    assert state['mode'] == 'letter'
    assert state['message'] == ''
    assert state['answer'] is None
    assert state['slots'] == [None, None, None, ' ', None, None, None, None]


def test_new_game_with_ruleset(client):
    state = start_game(client, ruleset='reward_penalty')['state']
    assert state['ruleset'] == 'reward_penalty'
    assert state['score'] == 0
    assert state['max_wrong_letters'] == 6


def test_new_game_unknown_ruleset(client):
    response = client.post('/api/new_game', json={'ruleset': 'sudden_death'})
    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_get_state(client):
    game_id = start_game(client)['game_id']
    response = client.get(f'/api/game/{game_id}/state')
    assert response.status_code == 200
    assert response.get_json()['state']['game_id'] == game_id


def test_unknown_game(client):
    assert client.get('/api/game/missing/state').status_code == 404
    assert client.post('/api/game/missing/letter', json={'letter': 'A'}).status_code == 404
    assert client.post('/api/game/missing/word', json={'guess': 'ASH'}).status_code == 404
    assert client.post('/api/game/missing/new_round').status_code == 404


def test_guess_letter(client):
    game_id = start_game(client)['game_id']
    response = client.post(f'/api/game/{game_id}/letter', json={'letter': 'e'})
    assert response.status_code == 200
    state = response.get_json()['state']
    assert state['guessed_letters'] == ['E']
    assert state['score'] == 85
    assert state['slots'][-2:] == ['E', 'E']


def test_guess_letter_requires_letter(client):
    game_id = start_game(client)['game_id']
    response = client.post(f'/api/game/{game_id}/letter', json={})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Letter is required'


def test_body_must_be_a_json_object(client):
    game_id = start_game(client)['game_id']
    response = client.post(f'/api/game/{game_id}/letter', json='letter')
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Letter is required'

    response = client.post(f'/api/game/{game_id}/word', json=['guess'])
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Guess is required'

    response = client.post('/api/new_game', json='reward_penalty')
    assert response.get_json()['state']['ruleset'] == 'cost_per_guess'


def test_word_guess_markup_is_rendered_as_text(client):
    game_id = start_game(client)['game_id']
    guess = '<img src=x onerror=alert(1)>'
    state = client.post(f'/api/game/{game_id}/word', json={'guess': guess}).get_json()['state']
    assert state['word_guesses'] == ['<IMG SRC=X ONERROR=ALERT(1)>']

    response = client.get('/treeguessr.js')
    script = response.get_data(as_text=True)
    response.close()
    assert 'item.textContent = guess' in script
    assert '<li>${' not in script


def test_client_discards_game_on_page_exit(client):
    response = client.get('/treeguessr.js')
    script = response.get_data(as_text=True)
    response.close()
    assert "addEventListener('pagehide'" in script
    assert "method: 'DELETE', keepalive: true" in script

    game_id = start_game(client)['game_id']
    assert client.delete(f'/api/game/{game_id}').status_code == 200
    assert client.get('/api/health').get_json()['active_games'] == 0


def test_invalid_letter_is_ignored(client):
    game_id = start_game(client)['game_id']
    response = client.post(f'/api/game/{game_id}/letter', json={'letter': '7'})
    assert response.status_code == 200
    state = response.get_json()['state']
    assert state['guessed_letters'] == []
    assert state['score'] == 100


def test_absent_letters_reported(client):
    game_id = start_game(client)['game_id']
    client.post(f'/api/game/{game_id}/letter', json={'letter': 'Z'})
    state = client.post(f'/api/game/{game_id}/letter', json={'letter': 'O'}).get_json()['state']
    assert state['absent_letters'] == ['Z']
    assert state['wrong_letters'] == 1


def test_word_guess_wins_and_reveals_answer(client):
    game_id = start_game(client)['game_id']
    response = client.post(f'/api/game/{game_id}/word', json={'guess': ' oak tree '})
    state = response.get_json()['state']
    assert state['state'] == 'won'
    assert state['answer'] == 'OAK TREE'
    assert state['message'] == 'You got it! It was OAK TREE. Final Score: 100'
    assert state['slots'] == list('OAK TREE')


def test_guess_after_round_over_is_ignored(client):
    game_id = start_game(client)['game_id']
    client.post(f'/api/game/{game_id}/word', json={'guess': 'OAK TREE'})
    state = client.post(f'/api/game/{game_id}/letter', json={'letter': 'Z'}).get_json()['state']
    assert state['state'] == 'won'
    assert 'Z' not in state['guessed_letters']


def test_wrong_word_guesses_lose(client):
    game_id = start_game(client)['game_id']
    for guess in ['PINE', 'ASH', 'ELM', 'FIR']:
        state = client.post(f'/api/game/{game_id}/word', json={'guess': guess}).get_json()['state']
        assert state['state'] == 'playing'
        assert state['answer'] is None

    state = client.post(f'/api/game/{game_id}/word', json={'guess': 'YEW'}).get_json()['state']
    assert state['state'] == 'lost'
    assert state['answer'] == 'OAK TREE'
    assert state['word_guesses'] == ['PINE', 'ASH', 'ELM', 'FIR', 'YEW']


def test_set_mode(client):
    game_id = start_game(client)['game_id']
    response = client.post(f'/api/game/{game_id}/mode', json={'mode': 'word'})
    assert response.get_json()['state']['mode'] == 'word'
    assert client.post(f'/api/game/{game_id}/mode', json={}).status_code == 400


def test_new_round(client):
    game_id = start_game(client)['game_id']
    client.post(f'/api/game/{game_id}/word', json={'guess': 'OAK TREE'})
    response = client.post(f'/api/game/{game_id}/new_round')
    assert response.status_code == 200
    state = response.get_json()['state']
    assert state['state'] == 'playing'
    assert state['guessed_letters'] == []
    assert state['answer'] is None


def test_delete_game(client):
    game_id = start_game(client)['game_id']
    assert client.delete(f'/api/game/{game_id}').status_code == 200
    assert client.delete(f'/api/game/{game_id}').status_code == 404


def test_rulesets(client):
    data = client.get('/api/rulesets').get_json()
    assert data['default'] == 'cost_per_guess'
    names = [ruleset['name'] for ruleset in data['rulesets']]
    assert {'reward_penalty', 'cost_per_guess', 'cost_per_guess_zero'} <= set(names)


def test_rulesets_request_is_logged(app, client):
    client.get('/api/rulesets')

    (log_file,) = Path(app.config['LOG_DIR']).glob('game_log_*.log')
    payloads = [line.split(' | ', 2)[-1] for line in log_file.read_text(encoding='utf-8').splitlines()]
    actions = [json.loads(payload) for payload in payloads if payload.startswith('{')]
    logged = [(entry['event_type'], entry['action']) for entry in actions]
    assert ('USER_ACTION', 'list_rulesets') in logged
    assert ('SERVER_RESPONSE_SUCCESS', 'list_rulesets') in logged


def test_health(client):
    start_game(client)
    data = client.get('/api/health').get_json()
    assert data['status'] == 'healthy'
    assert data['active_games'] == 1
    assert data['word_source_ready'] is True
    assert data['word_stats']['total_phrases'] == 1


def test_secret_not_logged_while_playing(app, client):
    game_id = start_game(client)['game_id']
    client.post(f'/api/game/{game_id}/letter', json={'letter': 'O'})
    client.get(f'/api/game/{game_id}/state')

    log_files = list(Path(app.config['LOG_DIR']).glob('game_log_*.log'))
    assert len(log_files) == 1
    content = log_files[0].read_text(encoding='utf-8')
    assert game_id in content
    assert 'OAK TREE' not in content


@pytest.fixture
def inert_client(inert_app):
    with inert_app.test_client() as c:
        yield c


def test_word_source_unavailable(inert_client):
    response = inert_client.post('/api/new_game')
    assert response.status_code == 503
    assert response.get_json()['error'] == 'Could not load tree list.'

    health = inert_client.get('/api/health').get_json()
    assert health['status'] == 'degraded'
    assert health['word_source_ready'] is False


def test_word_source_reload(inert_client, missing_word_list):
    assert inert_client.post('/api/word_source/reload').status_code == 503

    missing_word_list.write_text("ash\n", encoding="utf-8")
    response = inert_client.post('/api/word_source/reload')
    assert response.status_code == 200
    assert response.get_json()['word_stats']['total_phrases'] == 1

    state = start_game(inert_client)['state']
    assert state['slots'] == [None, None, None]
