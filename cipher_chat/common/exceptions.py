"""
Custom exceptions for CipherChat.

Every error in the handshake or the session loop is fatal: nothing in the
package retries or recovers, callers let these propagate to the CLI.
"""


class CipherChatException(Exception):
    """Base exception for CipherChat errors."""
    pass


class ParameterError(CipherChatException):
    """Numeric precondition violated (zero modulus, value outside 64 bits)."""
    pass


class TransportError(CipherChatException):
    """Socket I/O failed."""
    pass


class ConnectionClosedError(TransportError):
    """Peer closed the stream before the expected number of bytes arrived."""

    def __init__(self, expected: int, received: bytes):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Connection closed after {len(received)} of {expected} bytes"
        )


class HandshakeError(CipherChatException):
    """Key exchange did not complete."""
    pass


class ProtocolError(CipherChatException):
    """Protocol violation detected."""
    pass
