"""The live pick game.

One :class:`GameSession` per process holds who is connected, the shared
phase and the log of every pick. Each command takes the session lock,
applies the rules, persists through the injected store and returns the
emissions the transport should send. Nothing here does network I/O.
"""

from dataclasses import dataclass, field
from datetime import datetime
import logging
import threading
from typing import Callable, Dict, List, Optional

from . import protocol
from .protocol import Emission, Phase
from .store import SessionStore
from .tabulation import tabulate

logger = logging.getLogger(__name__)

DEFAULT_MAX_PICKS = 3


@dataclass
class Participant:
    connection_id: str
    name: str
    picks: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PickRecord:
    picker: str
    picked: str


def _clock_time() -> str:
    return datetime.now().strftime('%H:%M:%S')


class GameSession:
    def __init__(
        self,
        store: SessionStore,
        max_picks: int = DEFAULT_MAX_PICKS,
        clock: Callable[[], str] = _clock_time,
    ):
        self.store = store
        self.max_picks = max_picks
        self.clock = clock
        self.phase = Phase.WAITING
        self.connected: Dict[str, Participant] = {}
        self.pick_log: List[PickRecord] = []
        self.last_results: Optional[List[Dict]] = None
        # Re-entrant so the transport can hold it across a command and its dispatch
        self.lock = threading.RLock()
        logger.info(f"[session] created store={type(store).__name__} max_picks={max_picks}")

    # ---- helpers building emissions ----

    def _log(self, message: str) -> Emission:
        return Emission.to_all(protocol.GLOBAL_LOG, {'time': self.clock(), 'message': message})

    def _phase_to_all(self) -> Emission:
        return Emission.to_all(protocol.GAME_STATE, self.phase.value)

    def _user_list(self) -> Emission:
        return Emission.to_all(protocol.USER_LIST, self.connected_names())

    def connected_names(self) -> List[str]:
        return [p.name for p in self.connected.values()]

    def users_done(self) -> int:
        return sum(1 for p in self.connected.values() if len(p.picks) == self.max_picks)

    def snapshot(self) -> Dict:
        with self.lock:
            return {
                'phase': self.phase.value,
                'users': self.connected_names(),
                'totalPicks': len(self.pick_log),
                'usersDone': self.users_done(),
                'maxPicks': self.max_picks,
            }

    # ---- connection lifecycle ----

    def connect(self, connection_id: str) -> List[Emission]:
        with self.lock:
            return [
                Emission.to_one(connection_id, protocol.GAME_STATE, self.phase.value),
                self._user_list(),
            ]

    def disconnect(self, connection_id: str) -> List[Emission]:
        with self.lock:
            participant = self.connected.pop(connection_id, None)
            if participant is None:
                return []
            logger.info(f"[disconnect] name={participant.name} sid={connection_id}")
            return [self._user_list()]

    # ---- player commands ----

    def join(self, connection_id: str, name) -> List[Emission]:
        if not isinstance(name, str) or not name.strip():
            return [Emission.to_one(connection_id, protocol.ERROR, 'Name is required')]
        name = name.strip()
        with self.lock:
            stored = self.store.upsert_on_join(name)
            picks = list(stored.picks)
            self.connected[connection_id] = Participant(connection_id, name, picks)
            logger.info(f"[join] name={name} sid={connection_id} restored_picks={len(picks)}")

            out = [
                Emission.to_one(connection_id, protocol.JOINED, {'name': name}),
                Emission.to_one(connection_id, protocol.GAME_STATE, self.phase.value),
            ]
            if picks:
                out.append(Emission.to_one(connection_id, protocol.UPDATE_PICKS, list(picks)))
            out.append(self._log(f"{name} has joined the game"))
            out.append(self._user_list())
            return out

    def pick(self, connection_id: str, picked_name) -> List[Emission]:
        with self.lock:
            if self.phase is not Phase.STARTED:
                logger.debug(f"[pick-ignored] sid={connection_id} phase={self.phase.value}")
                return []
            participant = self.connected.get(connection_id)
            if participant is None:
                logger.debug(f"[pick-ignored] sid={connection_id} not joined")
                return []
            if not isinstance(picked_name, str) or not picked_name:
                logger.debug(f"[pick-ignored] sid={connection_id} empty target")
                return []
            if len(participant.picks) >= self.max_picks:
                return [Emission.to_one(connection_id, protocol.ERROR, 'Max picks reached')]

            picks = participant.picks + [picked_name]
            # Persist first so a failed write leaves the session untouched
            self.store.update_picks(participant.name, picks)
            participant.picks = picks
            self.pick_log.append(PickRecord(picker=participant.name, picked=picked_name))
            logger.info(f"[pick] {participant.name} -> {picked_name} ({len(picks)}/{self.max_picks})")

            return [
                Emission.to_one(connection_id, protocol.UPDATE_PICKS, list(picks)),
                self._log(f"{participant.name} picked {picked_name}"),
                Emission.to_all(protocol.ADMIN_UPDATE, {
                    'totalPicks': len(self.pick_log),
                    'usersDone': self.users_done(),
                }),
            ]

    # ---- admin commands ----

    def start_game(self) -> List[Emission]:
        with self.lock:
            if self.phase is Phase.FINISHED:
                logger.debug("[start-ignored] game is finished, reset first")
                return []
            self.phase = Phase.STARTED
            logger.info("[start] game started")
            return [
                self._log("🎮 Game has started! Pick your names now"),
                Emission.to_all(protocol.GAME_STARTED),
                self._phase_to_all(),
            ]

    def stop_game(self) -> List[Emission]:
        with self.lock:
            if self.phase is Phase.FINISHED:
                logger.debug("[stop-ignored] game is finished, reset first")
                return []
            self.phase = Phase.WAITING
            logger.info("[stop] game paused")
            return [
                self._log("⏸️ Game has been paused"),
                self._phase_to_all(),
            ]

    def calculate_results(self) -> List[Emission]:
        with self.lock:
            if self.phase is Phase.WAITING:
                return [Emission.to_all(protocol.RESULT_ERROR, 'Game has not started')]
            if self.phase is Phase.FINISHED:
                return [
                    Emission.to_all(protocol.GAME_FINISHED, list(self.last_results or [])),
                    self._phase_to_all(),
                ]

            pending = [
                f"{p.name} ({len(p.picks)}/{self.max_picks})"
                for p in self.connected.values()
                if len(p.picks) < self.max_picks
            ]
            if pending:
                logger.info(f"[results-pending] {len(pending)} participant(s) still picking")
                return [Emission.to_all(
                    protocol.RESULT_ERROR,
                    f"Not all users have picked {self.max_picks} names. Pending: {', '.join(pending)}",
                )]

            results = tabulate(self.pick_log)
            self.last_results = results
            self.phase = Phase.FINISHED
            logger.info(f"[results] {len(self.pick_log)} pick(s) over {len(results)} name(s)")
            return [
                self._log("🏆 Results are ready!"),
                Emission.to_all(protocol.GAME_FINISHED, list(results)),
                self._phase_to_all(),
            ]

    def reset_game(self) -> List[Emission]:
        with self.lock:
            self.store.clear_all()
            self.connected.clear()
            self.pick_log = []
            self.last_results = None
            self.phase = Phase.WAITING
            logger.info("[reset] roster, picks and phase cleared")
            return [
                Emission.to_all(protocol.GAME_RESET),
                self._phase_to_all(),
            ]
