"""
Cryptographic primitives for CipherChat.

This package provides:
- 64-bit modular exponentiation
- Role-ordered Diffie-Hellman key exchange
- ChaCha20-backed keystream for the XOR stream cipher
"""

from .modexp import pow_mod
from .dh import (
    DEFAULT_PARAMS, DomainParameters, KeyExchange, KeyExchangeState,
    HandshakeState, generate_keypair, compute_shared_secret
)
from .keystream import Keystream, expand_seed

__all__ = [
    'pow_mod',
    'DEFAULT_PARAMS',
    'DomainParameters',
    'KeyExchange',
    'KeyExchangeState',
    'HandshakeState',
    'generate_keypair',
    'compute_shared_secret',
    'Keystream',
    'expand_seed',
]
