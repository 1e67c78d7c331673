"""
Common utilities, wire format and configuration for CipherChat.
"""

from .protocol import *
from .utils import parse_address, format_secret, decode_text
from .exceptions import *
from .config import ChatSettings
from .transport import SocketTransport

__all__ = [
    'parse_address',
    'format_secret',
    'decode_text',
    'ChatSettings',
    'SocketTransport',
]
