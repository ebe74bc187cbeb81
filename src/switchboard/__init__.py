"""Switchboard - shared device state over WebSocket.

Lets many concurrent clients observe and toggle a single on/off actuator
and exchange text through a small JSON publish/subscribe protocol.
"""

__version__ = "0.1.0"

# Configuration
from switchboard.core.config import SwitchboardConfig

# Core
from switchboard.core.hub import Hub
from switchboard.core.state import ActuatorState, StateStore

# Protocol
from switchboard.protocol.envelopes import DecodeError, decode, encode

# Server
from switchboard.server.websocket import SwitchboardServer

__all__ = [
    # Version
    "__version__",
    # Configuration
    "SwitchboardConfig",
    # Core
    "ActuatorState",
    "StateStore",
    "Hub",
    # Protocol
    "DecodeError",
    "decode",
    "encode",
    # Server
    "SwitchboardServer",
]
