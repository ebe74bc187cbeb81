"""Pytest configuration and fixtures."""

from __future__ import annotations

import json
from typing import Any

import pytest

from switchboard.core.broadcaster import Broadcaster
from switchboard.core.hub import Hub
from switchboard.core.registry import ConnectionRegistry
from switchboard.core.state import StateStore


class RecordingTransport:
    """Transport that records every frame sent per session."""

    def __init__(self) -> None:
        self.frames: list[tuple[int, str]] = []
        self.failing: set[int] = set()

    def send(self, session_id: int, data: str) -> None:
        if session_id in self.failing:
            raise ConnectionError(f"Session {session_id} is gone")
        self.frames.append((session_id, data))

    def received(self, session_id: int) -> list[dict[str, Any]]:
        """Decoded frames delivered to one session, in order."""
        return [json.loads(data) for sid, data in self.frames if sid == session_id]

    def recipients(self) -> list[int]:
        """Session ids in delivery order."""
        return [sid for sid, _ in self.frames]

    def clear(self) -> None:
        self.frames.clear()


@pytest.fixture
def transport() -> RecordingTransport:
    """Create an empty recording transport."""
    return RecordingTransport()


@pytest.fixture
def store() -> StateStore:
    """Create a state store starting at (False, 0)."""
    return StateStore()


@pytest.fixture
def registry() -> ConnectionRegistry:
    """Create an empty connection registry."""
    return ConnectionRegistry()


@pytest.fixture
def broadcaster(registry: ConnectionRegistry, transport: RecordingTransport) -> Broadcaster:
    """Create a broadcaster over the recording transport."""
    return Broadcaster(registry, transport)


@pytest.fixture
def hub(store: StateStore, transport: RecordingTransport) -> Hub:
    """Create a hub over the recording transport."""
    return Hub(store, transport)


@pytest.fixture
def two_sessions(hub: Hub, transport: RecordingTransport) -> Hub:
    """Hub with sessions 0 and 1 connected and the transport cleared."""
    hub.connect(0)
    hub.connect(1)
    transport.clear()
    return hub
