import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///namepick.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Where the roster of every name that ever joined is kept: sql, json or memory
    SESSION_STORE = os.environ.get('SESSION_STORE', 'sql')
    # Only read when SESSION_STORE=json
    USERS_FILE = os.environ.get('USERS_FILE', os.path.join('data', 'users.json'))
    # Names each participant must pick before results can be calculated
    MAX_PICKS = int(os.environ.get('MAX_PICKS', '3'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:3002',
        ).split(',')
        if origin.strip()
    ]
