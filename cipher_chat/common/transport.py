"""
Byte transport used by the handshake and the session loops.

The key exchange only needs ``send_bytes`` and ``receive_exact``; the
receive-only session loop additionally reads whatever the socket delivers
with ``receive_some``. Tests substitute any object with the same methods.
"""

import socket
from typing import Protocol

from .exceptions import ConnectionClosedError, TransportError


class Transport(Protocol):
    def send_bytes(self, data: bytes) -> None: ...

    def receive_exact(self, n: int) -> bytes: ...


class SocketTransport:
    """Blocking transport over a connected TCP socket."""

    def __init__(self, sock: socket.socket):
        self.sock = sock

    def send_bytes(self, data: bytes) -> None:
        """Write all of ``data`` to the socket."""
        try:
            self.sock.sendall(data)
        except OSError as e:
            raise TransportError(f"Send failed: {e}") from e

    def receive_exact(self, n: int) -> bytes:
        """
        Read exactly ``n`` bytes.

        Raises:
            ConnectionClosedError: If the peer closes before ``n`` bytes arrive
            TransportError: On any other socket error
        """
        buf = bytearray()
        while len(buf) < n:
            chunk = self.receive_some(n - len(buf))
            if not chunk:
                raise ConnectionClosedError(n, bytes(buf))
            buf.extend(chunk)
        return bytes(buf)

    def receive_some(self, max_bytes: int) -> bytes:
        """Single read of up to ``max_bytes``; ``b''`` means the peer closed."""
        try:
            return self.sock.recv(max_bytes)
        except OSError as e:
            raise TransportError(f"Receive failed: {e}") from e

    def close(self) -> None:
        self.sock.close()
