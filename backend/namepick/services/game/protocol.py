from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Phase(str, Enum):
    WAITING = 'WAITING'
    STARTED = 'STARTED'
    FINISHED = 'FINISHED'


# Outbound event names, as the browser client listens for them
GAME_STATE = 'gameState'
JOINED = 'joined'
UPDATE_PICKS = 'updatePicks'
USER_LIST = 'userList'
GLOBAL_LOG = 'globalLog'
GAME_STARTED = 'gameStarted'
GAME_RESET = 'gameReset'
GAME_FINISHED = 'gameFinished'
ADMIN_UPDATE = 'adminUpdate'
ERROR = 'error'
RESULT_ERROR = 'resultError'


@dataclass(frozen=True)
class Emission:
    """One event the transport should send.

    ``to`` is the connection id for a reply to a single client; ``None``
    means broadcast to every open connection. ``payload`` of ``None`` sends
    the event without arguments.
    """

    event: str
    payload: Any = None
    to: Optional[str] = None

    @classmethod
    def to_one(cls, connection_id: str, event: str, payload: Any = None) -> 'Emission':
        return cls(event=event, payload=payload, to=connection_id)

    @classmethod
    def to_all(cls, event: str, payload: Any = None) -> 'Emission':
        return cls(event=event, payload=payload)

    @property
    def is_broadcast(self) -> bool:
        return self.to is None
