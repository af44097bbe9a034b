"""Game domain services: the pick session, its roster store and tabulation.

Nothing in here talks to Socket.IO or Flask request context. Commands on
:class:`GameSession` return the emissions the transport should send, which
keeps the socket handlers thin and the rules testable on their own.
"""

from .protocol import Emission, Phase
from .session import GameSession, Participant, PickRecord
from .store import (
    JsonFileSessionStore,
    MemorySessionStore,
    PersistenceError,
    SessionStore,
    SqlSessionStore,
)
from .tabulation import tabulate

__all__ = [
    'Emission',
    'GameSession',
    'JsonFileSessionStore',
    'MemorySessionStore',
    'Participant',
    'PersistenceError',
    'Phase',
    'PickRecord',
    'SessionStore',
    'SqlSessionStore',
    'tabulate',
]
