"""Wire protocol for Switchboard clients.

This package defines the envelopes exchanged over the WebSocket channel
and the codec that maps them to JSON text frames.
"""

from switchboard.protocol.envelopes import (
    ActuatorChanged,
    CommandName,
    DecodeError,
    Echo,
    EchoReply,
    Envelope,
    EventName,
    Hello,
    InboundEnvelope,
    OutboundEnvelope,
    Presence,
    PresenceKind,
    SetActuator,
    Unknown,
    decode,
    encode,
    encode_bytes,
    to_dict,
)

__all__ = [
    # Names
    "CommandName",
    "EventName",
    "PresenceKind",
    # Envelopes
    "Envelope",
    "InboundEnvelope",
    "OutboundEnvelope",
    "SetActuator",
    "Echo",
    "Unknown",
    "Hello",
    "ActuatorChanged",
    "Presence",
    "EchoReply",
    # Codec
    "DecodeError",
    "decode",
    "encode",
    "encode_bytes",
    "to_dict",
]
