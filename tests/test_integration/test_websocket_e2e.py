"""End-to-end WebSocket integration tests.

These tests drive a real server with several real clients:
1. Shared led state reaches every client
2. Late joiners get hello, snapshot, and the join notice
3. Echo stays with the sender
4. Garbage produces no traffic
5. Leaving clients are announced and dropped from broadcasts
"""

from __future__ import annotations

import asyncio
import contextlib
import json
from typing import Any

import pytest
import websockets

from switchboard.core.config import ServerConfig
from switchboard.core.state import ActuatorState, StateStore
from switchboard.devices import LogActuator, attach
from switchboard.server import SwitchboardServer


async def _recv(ws: Any, timeout: float = 2.0) -> dict[str, Any]:
    return json.loads(await asyncio.wait_for(ws.recv(), timeout=timeout))


async def _assert_silent(ws: Any, timeout: float = 0.2) -> None:
    """Assert that nothing arrives within timeout."""
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(ws.recv(), timeout=timeout)


class TestWebSocketEndToEnd:
    """Walk through a multi-client session."""

    @pytest.fixture
    def actuator(self) -> LogActuator:
        return LogActuator(active_low=True)

    @pytest.fixture
    async def running_server(self, actuator: LogActuator) -> SwitchboardServer:
        """Start a server with an attached actuator."""
        store = StateStore()
        attach(store, actuator)
        server = SwitchboardServer(store, ServerConfig(host="127.0.0.1", port=0))
        await server.start_background()
        yield server
        await server.stop()

    @pytest.fixture
    async def clients(self, running_server: SwitchboardServer) -> list[Any]:
        """Connect A and B and drain their greetings."""
        uri = f"ws://127.0.0.1:{running_server.port}"
        async with contextlib.AsyncExitStack() as stack:
            a = await stack.enter_async_context(websockets.connect(uri))
            for _ in range(3):
                await _recv(a)

            b = await stack.enter_async_context(websockets.connect(uri))
            for _ in range(3):
                await _recv(b)
            # A sees B join
            assert await _recv(a) == {"event": "presence", "type": "join", "who": 1}

            yield [a, b]

    async def test_full_workflow(
        self,
        running_server: SwitchboardServer,
        clients: list[Any],
        actuator: LogActuator,
    ) -> None:
        """Test the complete client workflow."""
        a, b = clients
        uri = f"ws://127.0.0.1:{running_server.port}"

        # 1. A turns the led on; both see it
        await a.send(json.dumps({"cmd": "led", "state": "on"}))
        assert await _recv(a) == {"event": "led", "value": True}
        assert await _recv(b) == {"event": "led", "value": True}
        assert running_server.hub.state() == ActuatorState(value=True, version=1)
        assert actuator.value is True

        # 2. C joins and sees the current state
        async with websockets.connect(uri) as c:
            assert await _recv(c) == {"event": "hello", "who": 2, "msg": "welcome"}
            assert await _recv(c) == {"event": "led", "value": True}
            join = {"event": "presence", "type": "join", "who": 2}
            assert await _recv(c) == join
            assert await _recv(a) == join
            assert await _recv(b) == join

            # 3. B's echo goes only to B
            await b.send(json.dumps({"cmd": "echo", "msg": "hi"}))
            assert await _recv(b) == {"event": "echo", "msg": "hi"}

            # 4. Garbage from A produces nothing
            await a.send("not-json")
            await _assert_silent(a)
            await _assert_silent(b)
            await _assert_silent(c)
            assert running_server.hub.state() == ActuatorState(value=True, version=1)

        # 5. C leaves; A and B are told
        leave = {"event": "presence", "type": "leave", "who": 2}
        assert await _recv(a) == leave
        assert await _recv(b) == leave
        assert running_server.hub.sessions == (0, 1)

        # Later broadcasts reach only A and B
        await b.send(json.dumps({"cmd": "led", "state": False}))
        assert await _recv(a) == {"event": "led", "value": False}
        assert await _recv(b) == {"event": "led", "value": False}
        assert running_server.hub.state() == ActuatorState(value=False, version=2)

    async def test_repeated_value_still_broadcasts(self, clients: list[Any]) -> None:
        """Setting the same value twice broadcasts twice."""
        a, b = clients

        for _ in range(2):
            await a.send(json.dumps({"cmd": "led", "state": "off"}))

        for ws in (a, b):
            assert await _recv(ws) == {"event": "led", "value": False}
            assert await _recv(ws) == {"event": "led", "value": False}

    async def test_rapid_commands_keep_order(
        self, running_server: SwitchboardServer, clients: list[Any]
    ) -> None:
        """Frames from one client are processed in arrival order."""
        a, b = clients
        values = [True, False, True, True, False, True]

        for value in values:
            await a.send(json.dumps({"cmd": "led", "state": value}))

        received = [(await _recv(b))["value"] for _ in values]
        assert received == values
        assert running_server.hub.state().version == len(values)

    async def test_server_stop_closes_clients(
        self, running_server: SwitchboardServer, clients: list[Any]
    ) -> None:
        """Stopping the server closes every client connection."""
        a, _ = clients

        await running_server.stop()

        with pytest.raises(websockets.exceptions.ConnectionClosed):
            while True:
                await asyncio.wait_for(a.recv(), timeout=2.0)
        assert running_server.client_count == 0
