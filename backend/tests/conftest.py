import os
import sys
import pytest

# Ensure the backend root (containing the `namepick` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from namepick import create_app, db, socketio
from namepick.services.game import GameSession, MemorySessionStore


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SESSION_STORE = 'memory'
    USERS_FILE = os.path.join('data', 'users.json')
    MAX_PICKS = 3
    SOCKETIO_NAMESPACE = '/'
    CORS_ORIGINS = []


class SqlTestConfig(TestConfig):
    SESSION_STORE = 'sql'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def sql_app():
    application = create_app(SqlTestConfig)
    with application.app_context():
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(flask_app):
    """Open Socket.IO test clients; all are disconnected at teardown."""
    opened = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        opened.append(test_client)
        return test_client

    yield _connect
    for test_client in opened:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except RuntimeError:
            pass


@pytest.fixture()
def store():
    return MemorySessionStore()


@pytest.fixture()
def session(store):
    return GameSession(store, clock=lambda: '12:00:00')
