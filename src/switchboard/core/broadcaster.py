"""Delivery of encoded envelopes to one or all registered sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import structlog

from switchboard.protocol.envelopes import OutboundEnvelope, encode

if TYPE_CHECKING:
    from switchboard.core.registry import ConnectionRegistry

log = structlog.get_logger()


class UnknownSession(KeyError):
    """Raised when sending to a session that is not registered."""


@runtime_checkable
class Transport(Protocol):
    """Frame sink provided by the connection layer.

    ``send`` must not block: implementations queue the frame and return.
    """

    def send(self, session_id: int, data: str) -> None:
        """Queue a text frame for one session.

        Raises:
            KeyError: If the transport has no connection for the session
        """
        ...


class Broadcaster:
    """Sends outbound envelopes through a transport.

    Sends are fire-and-forget: unknown sessions and transport failures are
    logged and dropped.
    """

    def __init__(self, registry: ConnectionRegistry, transport: Transport) -> None:
        self._registry = registry
        self._transport = transport

    def deliver(self, session_id: int, envelope: OutboundEnvelope) -> None:
        """Send an envelope to one session, strictly.

        Raises:
            UnknownSession: If the session is not registered
        """
        if session_id not in self._registry:
            raise UnknownSession(session_id)
        self._transport.send(session_id, encode(envelope))

    def send_to(self, session_id: int, envelope: OutboundEnvelope) -> bool:
        """Send an envelope to one session.

        Returns:
            True if the frame was handed to the transport, False if dropped
        """
        try:
            self.deliver(session_id, envelope)
        except UnknownSession:
            log.debug("Dropped send to unknown session", session=session_id)
            return False
        except Exception as e:
            log.warning("Send failed", session=session_id, error=str(e))
            return False
        return True

    def broadcast(self, envelope: OutboundEnvelope) -> int:
        """Send an envelope to every session registered at call time.

        Returns:
            Number of sessions the frame was handed to
        """
        frame = encode(envelope)
        sent = 0
        for session_id in self._registry.list():
            try:
                self._transport.send(session_id, frame)
            except Exception as e:
                log.warning("Broadcast send failed", session=session_id, error=str(e))
                continue
            sent += 1
        return sent
