"""Protocol dispatcher mapping inbound commands to their effects.

Decoding and effects are separate steps: frames are decoded into
envelopes by ``switchboard.protocol``, then routed through a handler
table keyed by envelope type.

Command → effect:
    SetActuator(v)  → StateStore.set(v), broadcast ActuatorChanged to all
    Echo(msg)       → EchoReply(msg) to the sender only
    Unknown         → dropped
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from switchboard.protocol.envelopes import (
    ActuatorChanged,
    DecodeError,
    Echo,
    EchoReply,
    InboundEnvelope,
    SetActuator,
    Unknown,
    decode,
)

if TYPE_CHECKING:
    from switchboard.core.broadcaster import Broadcaster
    from switchboard.core.registry import ConnectionRegistry
    from switchboard.core.state import StateStore

log = structlog.get_logger()

# Each handler takes the envelope type it is registered under
CommandHandler = Callable[[int, Any], None]


class ProtocolDispatcher:
    """Executes decoded commands on behalf of a session.

    The dispatcher is the only component that mutates the state store in
    response to client traffic.
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

        # Handlers registered by envelope type
        self._handlers: dict[type, CommandHandler] = {}
        self._register_default_handlers()

    def _register_default_handlers(self) -> None:
        self._handlers[SetActuator] = self._handle_set_actuator
        self._handlers[Echo] = self._handle_echo

    def handle_frame(self, session_id: int, raw: bytes | str) -> None:
        """Decode and dispatch a raw inbound frame.

        Malformed frames are dropped without a response.
        """
        try:
            envelope = decode(raw)
        except DecodeError as e:
            log.debug("Dropped malformed frame", session=session_id, error=str(e))
            return
        self.dispatch(session_id, envelope)

    def dispatch(self, session_id: int, envelope: InboundEnvelope) -> None:
        """Execute a decoded command for a session."""
        if session_id not in self._registry:
            log.debug("Dropped frame from unregistered session", session=session_id)
            return

        handler = self._handlers.get(type(envelope))
        if handler is None:
            cmd = envelope.cmd if isinstance(envelope, Unknown) else type(envelope).__name__
            log.debug("Dropped unknown command", session=session_id, cmd=cmd)
            return

        handler(session_id, envelope)

    # Command handlers

    def _handle_set_actuator(self, session_id: int, envelope: SetActuator) -> None:
        state = self._store.set(envelope.requested_value)
        log.info(
            "Actuator set",
            session=session_id,
            value=state.value,
            version=state.version,
        )
        self._broadcaster.broadcast(ActuatorChanged(value=state.value))

    def _handle_echo(self, session_id: int, envelope: Echo) -> None:
        self._broadcaster.send_to(session_id, EchoReply(message=envelope.message))
