from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def build_store(flask_app):
    """Pick the roster store named by SESSION_STORE."""
    from namepick.services.game import JsonFileSessionStore, MemorySessionStore, SqlSessionStore

    kind = (flask_app.config.get('SESSION_STORE') or 'sql').lower()
    if kind == 'sql':
        return SqlSessionStore(flask_app)
    if kind == 'json':
        return JsonFileSessionStore(flask_app.config['USERS_FILE'])
    if kind == 'memory':
        return MemorySessionStore()
    raise ValueError(f"Unknown SESSION_STORE {kind!r}; expected sql, json or memory")


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Ensure the roster table exists before the session reads it
    import namepick.models  # noqa: F401
    if (flask_app.config.get('SESSION_STORE') or 'sql').lower() == 'sql':
        with flask_app.app_context():
            db.create_all()

    from namepick.services.game import GameSession
    session = GameSession(build_store(flask_app), max_picks=int(flask_app.config.get('MAX_PICKS', 3)))
    flask_app.extensions['game_session'] = session

    from namepick.main import main
    flask_app.register_blueprint(main)

    from namepick.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    @click.command('reset-roster')
    def reset_roster_command():
        """Clears the stored roster. Stop the game server first: a running
        server keeps its own connected players and picks in memory."""
        build_store(flask_app).clear_all()
        print('Stored roster has been cleared!')

    flask_app.cli.add_command(reset_roster_command)

    flask_app.logger.info(
        f"[startup] store={type(session.store).__name__} max_picks={session.max_picks}"
    )
    return flask_app
