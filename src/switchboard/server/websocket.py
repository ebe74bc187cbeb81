"""WebSocket server for Switchboard clients.

This module provides the SwitchboardServer class that accepts client
connections, assigns session ids, and feeds connection events and text
frames into the Hub.

Architecture:
    ┌─────────────────────────────────────────┐
    │            SwitchboardServer            │
    ├─────────────────────────────────────────┤
    │  ┌─────────────┐    ┌────────────────┐  │
    │  │  Sessions   │    │  Outbound      │  │
    │  │  (id → ws)  │    │  queues        │  │
    │  └─────────────┘    └────────────────┘  │
    │         │                   ▲           │
    │         ▼                   │           │
    │  ┌─────────────────────────────────────┐│
    │  │   Hub (registry, state, dispatch)   ││
    │  └─────────────────────────────────────┘│
    └─────────────────────────────────────────┘

The hub never awaits. Frames it emits are queued per session and written
by one writer task per connection, which keeps per-session order.
"""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass, field

import structlog
import websockets
from websockets.asyncio.server import Server, ServerConnection, serve
from websockets.frames import CloseCode

from switchboard.core.config import ServerConfig
from switchboard.core.hub import Hub
from switchboard.core.state import StateStore
from switchboard.server.page import serve_page

log = structlog.get_logger()


@dataclass
class Session:
    """Per-connection state tracking.

    Attributes:
        id: Session id assigned on connect
        ws: WebSocket connection
        remote: Remote address for logging
        outbox: Frames waiting to be written
        writer: Task draining the outbox
    """

    id: int
    ws: ServerConnection
    remote: str = ""
    outbox: asyncio.Queue[str] = field(default_factory=asyncio.Queue)
    writer: asyncio.Task[None] | None = None


class SwitchboardServer:
    """WebSocket server sharing one actuator state between clients.

    Example:
        server = SwitchboardServer(StateStore())
        await server.start()  # Runs forever
    """

    def __init__(
        self,
        store: StateStore | None = None,
        config: ServerConfig | None = None,
    ) -> None:
        """Initialize the server.

        Args:
            store: State store to share (a fresh one if omitted)
            config: Server configuration
        """
        self._config = config or ServerConfig()
        self._hub = Hub(store if store is not None else StateStore(), self)

        self._sessions: dict[int, Session] = {}
        self._server: Server | None = None
        self._running = False

    @property
    def hub(self) -> Hub:
        """Hub processing this server's sessions."""
        return self._hub

    @property
    def client_count(self) -> int:
        """Number of connected clients."""
        return len(self._sessions)

    @property
    def is_running(self) -> bool:
        """Whether the server is currently running."""
        return self._running

    @property
    def port(self) -> int | None:
        """Bound port, once started."""
        if self._server is None or not self._server.sockets:
            return None
        return self._server.sockets[0].getsockname()[1]

    def _serve(self) -> serve:
        return serve(
            self._handle_client,
            self._config.host,
            self._config.port,
            process_request=serve_page if self._config.serve_page else None,
        )

    async def start(self) -> None:
        """Start the WebSocket server.

        Runs until stop() is called or the server is shut down.
        """
        self._running = True
        log.info("Starting WebSocket server", host=self._config.host, port=self._config.port)

        async with self._serve() as server:
            self._server = server
            log.info("Server listening", port=self.port)
            await server.serve_forever()

    async def start_background(self) -> None:
        """Start the server and return immediately; use stop() to shut down."""
        self._running = True
        self._server = await self._serve()
        log.info("Server started", host=self._config.host, port=self.port)

    async def stop(self) -> None:
        """Stop the server gracefully."""
        log.info("Stopping server")
        self._running = False

        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()
            self._server = None

    # Transport

    def send(self, session_id: int, data: str) -> None:
        """Queue a text frame for a session.

        Raises:
            KeyError: If the session has no open connection
        """
        self._sessions[session_id].outbox.put_nowait(data)

    def _allocate_id(self) -> int:
        """Lowest session id not held by a live connection."""
        session_id = 0
        while session_id in self._sessions:
            session_id += 1
        return session_id

    async def _write_loop(self, session: Session) -> None:
        """Drain a session's outbox onto its connection."""
        while True:
            data = await session.outbox.get()
            try:
                await session.ws.send(data)
            except websockets.exceptions.ConnectionClosed:
                return
            except Exception as e:
                # Closing ends the reader loop, which disconnects the session
                log.error("Client writer error", session=session.id, error=str(e))
                await session.ws.close(CloseCode.INTERNAL_ERROR, "send failed")
                return

    async def _handle_client(self, ws: ServerConnection) -> None:
        """Handle a new client connection."""
        remote = str(ws.remote_address) if ws.remote_address else "unknown"

        max_clients = self._config.max_clients
        if max_clients is not None and len(self._sessions) >= max_clients:
            log.warning(
                "Connection refused, server full", remote=remote, clients=len(self._sessions)
            )
            await ws.close(CloseCode.TRY_AGAIN_LATER, "server full")
            return

        session = Session(id=self._allocate_id(), ws=ws, remote=remote)
        self._sessions[session.id] = session
        session.writer = asyncio.create_task(self._write_loop(session))

        log.info(
            "Client connected", session=session.id, remote=remote, clients=len(self._sessions)
        )

        try:
            self._hub.connect(session.id)

            async for message in ws:
                if isinstance(message, str):
                    self._hub.receive(session.id, message)
                else:
                    # Binary messages not expected from client
                    log.warning("Unexpected binary message", session=session.id, remote=remote)

        except websockets.exceptions.ConnectionClosed as e:
            code = e.rcvd.code if e.rcvd is not None else None
            log.info("Client connection closed", session=session.id, code=code)
        except Exception as e:
            log.error("Client handler error", session=session.id, error=str(e))
        finally:
            self._hub.disconnect(session.id)
            del self._sessions[session.id]
            session.writer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await session.writer
            log.info("Client disconnected", session=session.id, clients=len(self._sessions))
