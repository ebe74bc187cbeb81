"""Core configuration, state, and session handling for Switchboard."""

from switchboard.core.broadcaster import Broadcaster, Transport, UnknownSession
from switchboard.core.config import (
    ActuatorConfig,
    DisplayConfig,
    ServerConfig,
    StateConfig,
    SwitchboardConfig,
)
from switchboard.core.dispatcher import ProtocolDispatcher
from switchboard.core.hub import Hub
from switchboard.core.presence import PresenceNotifier
from switchboard.core.registry import ConnectionRegistry
from switchboard.core.state import ActuatorState, StateObserver, StateStore

__all__ = [
    # Configuration
    "SwitchboardConfig",
    "ServerConfig",
    "StateConfig",
    "ActuatorConfig",
    "DisplayConfig",
    # State
    "ActuatorState",
    "StateObserver",
    "StateStore",
    # Sessions
    "ConnectionRegistry",
    "Broadcaster",
    "Transport",
    "UnknownSession",
    "ProtocolDispatcher",
    "PresenceNotifier",
    "Hub",
]
