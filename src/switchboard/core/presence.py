"""Connection lifecycle handling: welcome, snapshot, and presence notices."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from switchboard.protocol.envelopes import ActuatorChanged, Hello, Presence, PresenceKind

if TYPE_CHECKING:
    from switchboard.core.broadcaster import Broadcaster
    from switchboard.core.registry import ConnectionRegistry
    from switchboard.core.state import StateStore

log = structlog.get_logger()


class PresenceNotifier:
    """Announces sessions joining and leaving.

    A joining session gets a hello and the current actuator value before
    the join notice, which goes to every session including the joiner.
    """

    def __init__(
        self,
        store: StateStore,
        registry: ConnectionRegistry,
        broadcaster: Broadcaster,
    ) -> None:
        self._store = store
        self._registry = registry
        self._broadcaster = broadcaster

    def on_connect(self, session_id: int) -> None:
        """Register a new session and announce it."""
        if not self._registry.register(session_id):
            return

        self._broadcaster.send_to(session_id, Hello(session_id=session_id))
        self._broadcaster.send_to(session_id, ActuatorChanged(value=self._store.get().value))
        self._broadcaster.broadcast(Presence(kind=PresenceKind.JOIN, session_id=session_id))

        log.info("Session joined", session=session_id, sessions=len(self._registry))

    def on_disconnect(self, session_id: int) -> None:
        """Unregister a session and tell the remaining sessions."""
        if not self._registry.unregister(session_id):
            return

        self._broadcaster.broadcast(Presence(kind=PresenceKind.LEAVE, session_id=session_id))

        log.info("Session left", session=session_id, sessions=len(self._registry))
