"""
Wire format for CipherChat.

Handshake: each side sends one 8-byte big-endian unsigned integer (its DH
public value). No version, no length prefix, no acknowledgement.

Application phase: raw ciphertext. When framing is enabled on both peers each
message is ``[4-byte big-endian length][ciphertext]`` instead.
"""

import struct
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from .exceptions import ConnectionClosedError, ProtocolError

U64_MAX = 2**64 - 1

PUBLIC_VALUE_SIZE = 8
FRAME_HEADER_SIZE = 4
MAX_FRAME_SIZE = 2**32 - 1


class Role(str, Enum):
    """Fixed identity of a peer for the lifetime of a session."""
    SERVER = "server"
    CLIENT = "client"


class PublicValueMessage(BaseModel):
    """A peer's DH public value as carried on the wire."""
    value: int = Field(..., ge=0, le=U64_MAX, description="g^x mod p")

    def to_wire(self) -> bytes:
        return struct.pack('>Q', self.value)

    @classmethod
    def from_wire(cls, data: bytes) -> "PublicValueMessage":
        if len(data) != PUBLIC_VALUE_SIZE:
            raise ProtocolError(
                f"Public value must be {PUBLIC_VALUE_SIZE} bytes, got {len(data)}"
            )
        (value,) = struct.unpack('>Q', data)
        return cls(value=value)


# Framing helpers

def encode_frame(payload: bytes) -> bytes:
    """Prefix ``payload`` with its 4-byte big-endian length."""
    if len(payload) > MAX_FRAME_SIZE:
        raise ProtocolError(f"Frame too large: {len(payload)} bytes")
    return struct.pack('>I', len(payload)) + payload


def read_frame(transport) -> Optional[bytes]:
    """
    Read one length-prefixed frame.

    Returns:
        The frame payload, or None if the peer closed cleanly between frames

    Raises:
        ConnectionClosedError: If the stream ends inside a header or payload
    """
    try:
        header = transport.receive_exact(FRAME_HEADER_SIZE)
    except ConnectionClosedError as e:
        if not e.received:
            return None
        raise
    (length,) = struct.unpack('>I', header)
    return transport.receive_exact(length)
