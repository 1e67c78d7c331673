"""
Diffie-Hellman Key Exchange

Derives a shared 64-bit secret between the two peers of a session. The
exchange order is fixed by role so that the peers never block on a read at
the same time:

    server: send own public value, then receive the peer's
    client: receive the peer's public value, then send own

The domain parameters are hardcoded and identical on both peers. They are
NOT checked for primality and a 64-bit modulus is far too small for real
security; this is a teaching tool, not a secure channel.
"""

import secrets
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from cipher_chat.common.exceptions import (
    CipherChatException, HandshakeError, ParameterError, ProtocolError
)
from cipher_chat.common.protocol import (
    PUBLIC_VALUE_SIZE, U64_MAX, PublicValueMessage, Role
)
from .modexp import pow_mod


class DomainParameters(BaseModel):
    """Modulus and generator shared out of band by both peers."""
    model_config = ConfigDict(frozen=True)

    # p >= 3 so that [1, p-1) is non-empty
    p: int = Field(..., ge=3, le=U64_MAX, description="Modulus")
    g: int = Field(..., ge=0, le=U64_MAX, description="Generator")


DEFAULT_PARAMS = DomainParameters(p=0xD87FA3E291B4C7F3, g=2)


class HandshakeState(str, Enum):
    AWAITING_HANDSHAKE = "awaiting_handshake"
    ESTABLISHED = "established"


class KeyExchangeState(BaseModel):
    """Per-connection key exchange values. Never persisted or retransmitted."""
    role: Role
    state: HandshakeState = HandshakeState.AWAITING_HANDSHAKE
    private_exponent: int
    public_value: int
    peer_public_value: Optional[int] = None
    shared_secret: Optional[int] = None


# Order of wire operations per role. Reversing either entry deadlocks.
SEND, RECEIVE = "send", "receive"
HANDSHAKE_STEPS = {
    Role.SERVER: (SEND, RECEIVE),
    Role.CLIENT: (RECEIVE, SEND),
}


def generate_keypair(params: DomainParameters, rng) -> Tuple[int, int]:
    """
    Generate a DH keypair.

    Args:
        params: Domain parameters
        rng: Random source providing ``randrange(start, stop)``

    Returns:
        Tuple of (private_exponent, public_value)
        private_exponent: Uniform integer in [1, p-1)
        public_value: g^private_exponent mod p
    """
    private_exponent = rng.randrange(1, params.p - 1)
    if not 1 <= private_exponent < params.p - 1:
        raise ParameterError(f"Private exponent out of range: {private_exponent}")
    return private_exponent, pow_mod(params.g, private_exponent, params.p)


def compute_shared_secret(private_exponent: int, peer_public_value: int,
                          params: DomainParameters) -> int:
    """
    Compute the shared secret from the peer's public value.

    Returns:
        peer_public_value^private_exponent mod p
    """
    return pow_mod(peer_public_value, private_exponent, params.p)


class KeyExchange:
    """
    Role-ordered handshake for one connection.

    Example:

    >>> kx = KeyExchange(Role.SERVER)
    >>> secret = kx.perform(SocketTransport(conn))
    """

    def __init__(self, role: Role, params: DomainParameters = DEFAULT_PARAMS, rng=None):
        """
        Args:
            role: Which side of the connection this is
            params: Domain parameters (must match the peer's)
            rng: Random source with ``randrange``; defaults to a fresh
                ``secrets.SystemRandom`` owned by this instance
        """
        self.role = Role(role)
        self.params = params
        self.rng = rng if rng is not None else secrets.SystemRandom()

        private_exponent, public_value = generate_keypair(self.params, self.rng)
        self.state = KeyExchangeState(
            role=self.role,
            private_exponent=private_exponent,
            public_value=public_value,
        )

    @property
    def established(self) -> bool:
        return self.state.state is HandshakeState.ESTABLISHED

    def perform(self, transport) -> int:
        """
        Run the exchange over ``transport`` and return the shared secret.

        Raises:
            HandshakeError: If the 8-byte exchange fails or is truncated
            ProtocolError: If this exchange has already been performed
        """
        if self.state.state is not HandshakeState.AWAITING_HANDSHAKE:
            raise ProtocolError("Key exchange already performed")

        own = PublicValueMessage(value=self.state.public_value)
        peer = None

        try:
            for step in HANDSHAKE_STEPS[self.role]:
                if step == SEND:
                    transport.send_bytes(own.to_wire())
                else:
                    peer = PublicValueMessage.from_wire(
                        transport.receive_exact(PUBLIC_VALUE_SIZE)
                    )
        except (CipherChatException, OSError) as e:
            raise HandshakeError(f"Key exchange failed ({self.role.value}): {e}") from e

        self.state.peer_public_value = peer.value
        self.state.shared_secret = compute_shared_secret(
            self.state.private_exponent, peer.value, self.params
        )
        self.state.state = HandshakeState.ESTABLISHED
        return self.state.shared_secret
