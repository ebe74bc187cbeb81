"""Hub wiring the core components to a transport.

The hub is the entry point the connection layer calls for every event:

    connect(id)       → PresenceNotifier.on_connect
    receive(id, raw)  → ProtocolDispatcher.handle_frame
    disconnect(id)    → PresenceNotifier.on_disconnect

Each event runs to completion under a single lock, so the state version
and the session set stay consistent even if events arrive from several
threads. Under the asyncio server every event already runs on one loop
and the lock is uncontended.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from switchboard.core.broadcaster import Broadcaster
from switchboard.core.dispatcher import ProtocolDispatcher
from switchboard.core.presence import PresenceNotifier
from switchboard.core.registry import ConnectionRegistry

if TYPE_CHECKING:
    from switchboard.core.broadcaster import Transport
    from switchboard.core.state import ActuatorState, StateStore


class Hub:
    """Session, protocol, and state synchronization engine.

    Example:
        store = StateStore()
        hub = Hub(store, transport)
        hub.connect(0)
        hub.receive(0, '{"cmd":"led","state":"on"}')
    """

    def __init__(
        self,
        store: StateStore,
        transport: Transport,
        registry: ConnectionRegistry | None = None,
    ) -> None:
        self._store = store
        self._registry = registry or ConnectionRegistry()
        self._broadcaster = Broadcaster(self._registry, transport)
        self._dispatcher = ProtocolDispatcher(store, self._registry, self._broadcaster)
        self._presence = PresenceNotifier(store, self._registry, self._broadcaster)
        self._lock = threading.RLock()

    @property
    def store(self) -> StateStore:
        """State store owned by this hub."""
        return self._store

    @property
    def registry(self) -> ConnectionRegistry:
        """Registry of live sessions."""
        return self._registry

    @property
    def broadcaster(self) -> Broadcaster:
        """Broadcaster bound to the transport."""
        return self._broadcaster

    @property
    def sessions(self) -> tuple[int, ...]:
        """Snapshot of live session ids."""
        with self._lock:
            return self._registry.list()

    def state(self) -> ActuatorState:
        """Current actuator state."""
        with self._lock:
            return self._store.get()

    def connect(self, session_id: int) -> None:
        """Handle a new connection."""
        with self._lock:
            self._presence.on_connect(session_id)

    def disconnect(self, session_id: int) -> None:
        """Handle a closed connection."""
        with self._lock:
            self._presence.on_disconnect(session_id)

    def receive(self, session_id: int, raw: bytes | str) -> None:
        """Handle an inbound frame from a session."""
        with self._lock:
            self._dispatcher.handle_frame(session_id, raw)
