import pytest


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_state_snapshot_tracks_socket_session(client, connect):
    player = connect()
    player.emit('joinGame', 'Alice')
    admin = connect()
    admin.emit('startGame')
    player.emit('pickName', 'Bob')

    res = client.get('/api/game/state')
    assert res.status_code == 200
    assert res.get_json() == {
        'phase': 'STARTED',
        'users': ['Alice'],
        'totalPicks': 1,
        'usersDone': 0,
        'maxPicks': 3,
    }


def test_create_app_binds_session_and_handlers(flask_app, connect):
    assert flask_app.extensions['game_session'].phase.value == 'WAITING'
    player = connect()
    assert player.is_connected()


def test_reset_roster_clears_only_the_stored_roster(sql_app):
    from namepick.services.game import SqlSessionStore

    SqlSessionStore(sql_app).upsert_on_join('Alice')
    session = sql_app.extensions['game_session']
    session.join('s1', 'Bob')

    result = sql_app.test_cli_runner().invoke(args=['reset-roster'])
    assert 'Stored roster has been cleared!' in result.output
    assert SqlSessionStore(sql_app).load() == []
    # The live game is the running server's business, not the command's
    assert session.connected_names() == ['Bob']


def test_reset_roster_empties_json_file(flask_app, tmp_path):
    import json

    path = tmp_path / 'users.json'
    path.write_text('[{"name": "Alice", "picks": ["Bob"]}]', encoding='utf-8')
    flask_app.config['SESSION_STORE'] = 'json'
    flask_app.config['USERS_FILE'] = str(path)

    flask_app.test_cli_runner().invoke(args=['reset-roster'])
    assert json.loads(path.read_text(encoding='utf-8')) == []


def test_build_store_follows_config(flask_app, tmp_path):
    from namepick import build_store
    from namepick.services.game import JsonFileSessionStore, MemorySessionStore, SqlSessionStore

    assert isinstance(build_store(flask_app), MemorySessionStore)
    flask_app.config['SESSION_STORE'] = 'json'
    flask_app.config['USERS_FILE'] = str(tmp_path / 'users.json')
    assert isinstance(build_store(flask_app), JsonFileSessionStore)
    flask_app.config['SESSION_STORE'] = 'sql'
    assert isinstance(build_store(flask_app), SqlSessionStore)
    flask_app.config['SESSION_STORE'] = 'redis'
    with pytest.raises(ValueError):
        build_store(flask_app)
