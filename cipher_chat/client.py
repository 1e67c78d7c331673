"""
CipherChat Client

Send-only side of a session:
1. Connect to the server
2. Diffie-Hellman exchange (client receives first)
3. Encrypt each line of local input and send it until end of input
"""

import socket
import sys

from cipher_chat.crypto import KeyExchange, Keystream, DEFAULT_PARAMS
from cipher_chat.common.config import ChatSettings
from cipher_chat.common.protocol import Role, encode_frame
from cipher_chat.common.transport import SocketTransport
from cipher_chat.common.utils import format_secret


class ClientSession:
    """Send loop bound to one established connection."""

    def __init__(self, transport, keystream: Keystream, settings: ChatSettings, input_stream=None):
        self.transport = transport
        self.keystream = keystream
        self.settings = settings
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.messages_sent = 0

    def send_line(self, line: str):
        """Encrypt one line and write it in a single send."""
        plaintext = line.rstrip('\r\n').encode('utf-8')
        # nothing to send, and no keystream consumed
        if not plaintext:
            return

        ciphertext = self.keystream.apply(plaintext)
        if self.settings.framed:
            ciphertext = encode_frame(ciphertext)
        self.transport.send_bytes(ciphertext)
        self.messages_sent += 1

    def run(self):
        """Loop until local input is exhausted."""
        while True:
            line = self.input_stream.readline()
            if not line:
                break
            self.send_line(line)


class CipherChatClient:
    def __init__(self, host: str, port: int, settings: ChatSettings = None, params=DEFAULT_PARAMS, rng=None):
        self.host = host
        self.port = port
        self.settings = settings if settings is not None else ChatSettings.from_env()
        self.params = params
        self.rng = rng
        self.sock = None
        self.shared_secret = None

    def connect(self):
        """Connect to server and establish the session key."""
        self.sock = socket.create_connection((self.host, self.port))
        print(f"[✓] Connected to {self.host}:{self.port}")

        kx = KeyExchange(Role.CLIENT, self.params, self.rng)
        self.shared_secret = kx.perform(SocketTransport(self.sock))
        print(f"[✓] Session key established: {format_secret(self.shared_secret)}")

    def chat_loop(self, input_stream=None):
        """Send encrypted lines until end of input."""
        session = ClientSession(
            SocketTransport(self.sock), Keystream(self.shared_secret),
            self.settings, input_stream
        )
        session.run()

    def disconnect(self):
        """Disconnect from server."""
        if self.sock:
            self.sock.close()
            self.sock = None
            print("[*] Disconnected from server")

    def start(self, input_stream=None):
        try:
            self.connect()
            self.chat_loop(input_stream)
        finally:
            self.disconnect()
