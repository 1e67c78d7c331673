"""
CipherChat

A console chat between two peers implementing:
- Diffie-Hellman key agreement over 64-bit domain parameters
- ChaCha20-seeded keystream
- Byte-wise XOR stream cipher over a single TCP connection

Demonstration only: no authentication, no integrity, no forward secrecy.
"""

__version__ = "1.0.0"
