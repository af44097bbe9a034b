from flask import current_app, request
from namepick import socketio
from namepick.services.game import Emission, GameSession, PersistenceError
from typing import Callable, List

# Namespace the handlers were registered on; emissions go back out on it
_namespace = '/'


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _session() -> GameSession:
    return current_app.extensions['game_session']


def dispatch(emissions: List[Emission], namespace: str) -> None:
    """Send what a session command returned, in order."""
    for em in emissions:
        args = () if em.payload is None else (em.payload,)
        if em.is_broadcast:
            socketio.emit(em.event, *args, namespace=namespace)
        else:
            socketio.emit(em.event, *args, to=em.to, namespace=namespace)


def _run(command: Callable[[GameSession], List[Emission]]) -> None:
    # Hold the session lock across the command and its dispatch so that
    # broadcasts from different commands never interleave
    session = _session()
    with session.lock:
        try:
            emissions = command(session)
        except PersistenceError:
            current_app.logger.exception("[store-failure] roster write failed")
            raise
        dispatch(emissions, _namespace)


def handle_connect(auth=None):
    sid = _get_sid()
    current_app.logger.info(f"[connect] sid={sid}")
    _run(lambda s: s.connect(sid))


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")
    _run(lambda s: s.disconnect(sid))


def handle_join_game(name=None):
    sid = _get_sid()
    _run(lambda s: s.join(sid, name))


def handle_start_game(*_):
    _run(lambda s: s.start_game())


def handle_stop_game(*_):
    _run(lambda s: s.stop_game())


def handle_pick_name(name=None):
    sid = _get_sid()
    _run(lambda s: s.pick(sid, name))


def handle_calculate_results(*_):
    _run(lambda s: s.calculate_results())


def handle_reset_game(*_):
    _run(lambda s: s.reset_game())


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Inbound message names match what the browser client emits.
    """
    global _namespace
    _namespace = namespace
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinGame', handle_join_game, namespace=namespace)
    socketio.on_event('startGame', handle_start_game, namespace=namespace)
    socketio.on_event('stopGame', handle_stop_game, namespace=namespace)
    socketio.on_event('pickName', handle_pick_name, namespace=namespace)
    socketio.on_event('calculateResults', handle_calculate_results, namespace=namespace)
    socketio.on_event('resetGame', handle_reset_game, namespace=namespace)
