"""WebSocket server and built-in control page.

This module provides the WebSocket server for Switchboard that enables:
- Shared actuator control with state broadcast to every client
- Presence notices as clients join and leave
- Echo of free-form text back to the sender
- A minimal HTML control page on the same port
"""

from switchboard.server.page import INDEX_HTML, serve_page
from switchboard.server.websocket import Session, SwitchboardServer

__all__ = [
    # Page
    "INDEX_HTML",
    "serve_page",
    # WebSocket
    "Session",
    "SwitchboardServer",
]
