#!/usr/bin/env python3
"""WebSocket client example for Switchboard.

This script connects to a running Switchboard server, toggles the shared
LED, sends an echo, and then prints every event until interrupted.

Usage:
    1. Start the server: switchboard run examples/switchboard.yaml
    2. Run this client: python examples/websocket_client.py [host] [port]

The client will:
    1. Receive the hello and the current LED state
    2. Flip the LED
    3. Echo a message
    4. Print presence and LED events from other clients
"""

from __future__ import annotations

import asyncio
import json
import sys


async def main(host: str = "127.0.0.1", port: int = 8081) -> int:
    """Connect to a Switchboard server and follow its events."""
    # Import websockets here to give helpful error if missing
    try:
        import websockets
    except ImportError:
        print("Error: websockets package required. Install with: pip install websockets")
        return 1

    uri = f"ws://{host}:{port}/"
    print(f"Connecting to {uri}...")

    try:
        async with websockets.connect(uri) as ws:
            # 1. Hello and state snapshot
            hello = json.loads(await asyncio.wait_for(ws.recv(), timeout=5.0))
            snapshot = json.loads(await asyncio.wait_for(ws.recv(), timeout=2.0))
            session_id = hello["who"]
            led_on = snapshot["value"]

            print("\n=== Connected ===")
            print(f"Session: {session_id}")
            print(f"LED: {'ON' if led_on else 'OFF'}")

            # 2. Flip the LED
            print("\n=== Toggling LED ===")
            await ws.send(json.dumps({"cmd": "led", "state": "off" if led_on else "on"}))

            # 3. Echo
            await ws.send(json.dumps({"cmd": "echo", "msg": f"hello from {session_id}"}))

            # 4. Follow events
            print("\n=== Events (Ctrl+C to stop) ===")
            while True:
                try:
                    msg = json.loads(await asyncio.wait_for(ws.recv(), timeout=5.0))
                except TimeoutError:
                    print("(waiting for events...)")
                    continue

                match msg.get("event"):
                    case "led":
                        print(f"LED: {'ON' if msg['value'] else 'OFF'}")
                    case "presence":
                        print(f"Session {msg['who']} {msg['type']}")
                    case "echo":
                        print(f"Echo: {msg['msg']}")
                    case _:
                        print(f"[{msg.get('event')}] {msg}")

    except ConnectionRefusedError:
        print(f"Error: Could not connect to {uri}")
        print("Make sure the server is running with: switchboard run")
        return 1
    except KeyboardInterrupt:
        print("\n\nClient stopped.")
        return 0
    except websockets.exceptions.ConnectionClosed as e:
        code = e.rcvd.code if e.rcvd is not None else None
        print(f"\n\nServer closed the connection (code {code}).")
        return 0

    return 0


if __name__ == "__main__":
    args = sys.argv[1:]
    host = args[0] if args else "127.0.0.1"
    port = int(args[1]) if len(args) > 1 else 8081
    sys.exit(asyncio.run(main(host, port)))
