"""JSON envelope codec for the Switchboard WebSocket protocol.

This module defines the immutable envelopes exchanged between the server
and connected clients, plus the functions that convert them to and from
wire frames.

Message Types:
    Client → Server:
        - led: Set the shared actuator ({"cmd": "led", "state": ...})
        - echo: Echo text back to the sender ({"cmd": "echo", "msg": ...})

    Server → Client:
        - hello: Welcome message carrying the session id
        - led: Current actuator value
        - presence: Join/leave notices
        - echo: Echo reply
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class DecodeError(ValueError):
    """Raised when an inbound frame is not a well-formed JSON object."""


class CommandName(str, Enum):
    """Recognized inbound command names."""

    LED = "led"
    ECHO = "echo"


class EventName(str, Enum):
    """Outbound event names."""

    HELLO = "hello"
    LED = "led"
    PRESENCE = "presence"
    ECHO = "echo"


class PresenceKind(str, Enum):
    """Presence notice kinds."""

    JOIN = "join"
    LEAVE = "leave"


# Inbound envelopes


@dataclass(frozen=True, slots=True)
class SetActuator:
    """Request to set the shared actuator value."""

    requested_value: bool


@dataclass(frozen=True, slots=True)
class Echo:
    """Request to echo text back to the sender."""

    message: str = ""


@dataclass(frozen=True, slots=True)
class Unknown:
    """Structurally valid command with an unrecognized or missing ``cmd``."""

    cmd: str | None = None


# Outbound envelopes


@dataclass(frozen=True, slots=True)
class Hello:
    """Welcome message sent to a newly connected session."""

    session_id: int


@dataclass(frozen=True, slots=True)
class ActuatorChanged:
    """Current actuator value."""

    value: bool


@dataclass(frozen=True, slots=True)
class Presence:
    """Join or leave notice for a session."""

    kind: PresenceKind
    session_id: int


@dataclass(frozen=True, slots=True)
class EchoReply:
    """Echo reply sent only to the requesting session."""

    message: str


InboundEnvelope = SetActuator | Echo | Unknown
OutboundEnvelope = Hello | ActuatorChanged | Presence | EchoReply
Envelope = InboundEnvelope | OutboundEnvelope

HELLO_MESSAGE = "welcome"


def _parse_state(value: Any) -> bool:
    """Interpret the ``state`` field of a led command.

    Booleans are taken as-is. Strings are compared case-insensitively
    with "on"; everything else means off.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() == "on"
    return False


def _parse_message(value: Any) -> str:
    """Interpret the ``msg`` field of an echo command.

    Anything other than a string means an empty message.

    Raises:
        DecodeError: If the string holds lone surrogates (no UTF-8 form)
    """
    if not isinstance(value, str):
        return ""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise DecodeError(f"Invalid msg text: {e}") from e
    return value


def decode(raw: bytes | str) -> InboundEnvelope:
    """Decode an inbound frame into an envelope.

    Args:
        raw: Frame payload as received from the transport

    Returns:
        SetActuator, Echo, or Unknown envelope

    Raises:
        DecodeError: If the frame is not UTF-8, not JSON (including JSON nested
            too deeply to parse), or not a JSON object
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
        parsed = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise DecodeError(f"Invalid frame: {e}") from e

    if not isinstance(parsed, dict):
        raise DecodeError("Frame must be a JSON object")

    cmd = parsed.get("cmd")
    match cmd:
        case CommandName.LED.value:
            return SetActuator(requested_value=_parse_state(parsed.get("state")))
        case CommandName.ECHO.value:
            return Echo(message=_parse_message(parsed.get("msg")))
        case _:
            return Unknown(cmd=cmd if isinstance(cmd, str) else None)


def to_dict(envelope: OutboundEnvelope) -> dict[str, Any]:
    """Convert an outbound envelope to its wire field mapping.

    Field order is fixed per event type.

    Raises:
        TypeError: If envelope is not an outbound envelope
    """
    match envelope:
        case Hello(session_id=session_id):
            return {"event": EventName.HELLO.value, "who": session_id, "msg": HELLO_MESSAGE}
        case ActuatorChanged(value=value):
            return {"event": EventName.LED.value, "value": value}
        case Presence(kind=kind, session_id=session_id):
            return {"event": EventName.PRESENCE.value, "type": kind.value, "who": session_id}
        case EchoReply(message=message):
            return {"event": EventName.ECHO.value, "msg": message}
    raise TypeError(f"Cannot encode {type(envelope).__name__} envelope")


def encode(envelope: OutboundEnvelope) -> str:
    """Encode an outbound envelope as a compact JSON text frame."""
    return json.dumps(to_dict(envelope), separators=(",", ":"), ensure_ascii=False)


def encode_bytes(envelope: OutboundEnvelope) -> bytes:
    """Encode an outbound envelope as UTF-8 bytes."""
    return encode(envelope).encode("utf-8")
