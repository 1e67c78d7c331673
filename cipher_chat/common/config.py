"""
Runtime configuration for CipherChat.

Values come from the environment (optionally a ``.env`` file). Command-line
flags override them. Diffie-Hellman domain parameters are intentionally not
configurable here; see ``cipher_chat.crypto.dh``.
"""

import os
from pydantic import BaseModel, ConfigDict, Field
from dotenv import load_dotenv

# Load environment
load_dotenv()

DEFAULT_BIND_HOST = "0.0.0.0"
DEFAULT_RECV_BUFFER_SIZE = 1024


class ChatSettings(BaseModel):
    """Settings shared by the server and client sessions."""
    model_config = ConfigDict(frozen=True)

    bind_host: str = Field(DEFAULT_BIND_HOST, description="Interface the server listens on")
    recv_buffer_size: int = Field(
        DEFAULT_RECV_BUFFER_SIZE, gt=0,
        description="Maximum bytes per socket read on the receiving side"
    )
    framed: bool = Field(False, description="Length-prefix each encrypted message")

    @classmethod
    def from_env(cls, **overrides) -> "ChatSettings":
        """
        Build settings from CIPHERCHAT_* environment variables.

        Args:
            **overrides: Values that take precedence over the environment
                (``None`` values are ignored)

        Raises:
            pydantic.ValidationError: If a value cannot be parsed
        """
        values = {
            'bind_host': os.getenv('CIPHERCHAT_BIND_HOST', DEFAULT_BIND_HOST),
            'recv_buffer_size': os.getenv('CIPHERCHAT_RECV_BUFFER_SIZE', DEFAULT_RECV_BUFFER_SIZE),
            'framed': os.getenv('CIPHERCHAT_FRAMED', False),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
