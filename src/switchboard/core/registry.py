"""Connection registry tracking the live session set."""

from __future__ import annotations

from collections.abc import Iterator

import structlog

log = structlog.get_logger()


class ConnectionRegistry:
    """Set of currently connected session ids.

    The registry is the sole owner of the live session set. Iteration and
    ``list()`` follow registration order.
    """

    def __init__(self) -> None:
        # dict keys keep insertion order
        self._sessions: dict[int, None] = {}

    def register(self, session_id: int) -> bool:
        """Add a session to the live set.

        Args:
            session_id: Session identifier assigned by the transport

        Returns:
            True if added, False if the session was already registered
        """
        if session_id in self._sessions:
            log.warning("Session already registered", session=session_id)
            return False
        self._sessions[session_id] = None
        return True

    def unregister(self, session_id: int) -> bool:
        """Remove a session from the live set.

        Returns:
            True if removed, False if the session was not registered
        """
        if session_id not in self._sessions:
            return False
        del self._sessions[session_id]
        return True

    def list(self) -> tuple[int, ...]:
        """Snapshot of the registered session ids."""
        return tuple(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[int]:
        return iter(self.list())
