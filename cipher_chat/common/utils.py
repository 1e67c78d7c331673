"""
Utility functions for CipherChat.
"""

from typing import Tuple


def parse_address(address: str) -> Tuple[str, int]:
    """
    Split a ``host:port`` string into its parts.

    IPv6 hosts may be written in brackets (``[::1]:9000``).

    Args:
        address: Address in ``host:port`` form

    Returns:
        Tuple of (host, port)

    Raises:
        ValueError: If the address has no port or the port is out of range
    """
    host, sep, port_str = address.rpartition(':')
    if not sep or not host:
        raise ValueError(f"Expected host:port, got '{address}'")

    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]

    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"Invalid port in '{address}'") from None

    if not 0 < port < 65536:
        raise ValueError(f"Port out of range in '{address}'")

    return host, port


def format_secret(secret: int) -> str:
    """Hex rendering of a shared secret, as shown on the console."""
    return f"{secret:x}"


def decode_text(data: bytes) -> str:
    """
    Decode received plaintext for display.

    Invalid UTF-8 (including a character split across two reads) is
    replaced rather than rejected.
    """
    return data.decode('utf-8', errors='replace')
