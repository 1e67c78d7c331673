"""
CipherChat Server

Receive-only side of a session:
1. Listen and accept exactly one connection
2. Diffie-Hellman exchange (server sends first)
3. Decrypt and display everything the client sends until it disconnects
"""

import socket
import sys

from cipher_chat.crypto import KeyExchange, Keystream, DEFAULT_PARAMS
from cipher_chat.common.config import ChatSettings
from cipher_chat.common.protocol import Role, read_frame
from cipher_chat.common.transport import SocketTransport
from cipher_chat.common.utils import format_secret, decode_text


class ServerSession:
    """
    Receive loop bound to one established connection.

    Each received byte is XORed with the next keystream byte in the order it
    was read, so the keystream advances exactly as far as the client's did.
    """

    def __init__(self, transport, keystream: Keystream, settings: ChatSettings, output=None):
        self.transport = transport
        self.keystream = keystream
        self.settings = settings
        self.output = output if output is not None else sys.stdout
        self.messages_received = 0

    def _next_ciphertext(self):
        if self.settings.framed:
            return read_frame(self.transport)
        data = self.transport.receive_some(self.settings.recv_buffer_size)
        return data or None

    def run(self):
        """Loop until the peer closes the connection."""
        while True:
            ciphertext = self._next_ciphertext()
            if ciphertext is None:
                break

            plaintext = self.keystream.apply(ciphertext)
            self.messages_received += 1
            print(f"  [Client] {decode_text(plaintext)}", file=self.output, flush=True)


class CipherChatServer:
    def __init__(self, port: int, settings: ChatSettings = None, params=DEFAULT_PARAMS, rng=None):
        self.port = port
        self.settings = settings if settings is not None else ChatSettings.from_env()
        self.params = params
        self.rng = rng
        self.server_socket = None
        self.shared_secret = None

    def bind(self):
        """Bind and listen. Port 0 picks a free port, stored back in ``self.port``."""
        self.server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            self.server_socket.bind((self.settings.bind_host, self.port))
            self.server_socket.listen(1)
        except OSError:
            self.server_socket.close()
            self.server_socket = None
            raise
        self.port = self.server_socket.getsockname()[1]
        print(f"[*] Waiting for a peer on {self.settings.bind_host}:{self.port}...")

    def accept_one(self):
        """Accept a single connection, then stop listening."""
        try:
            client_socket, address = self.server_socket.accept()
        finally:
            self.server_socket.close()
            self.server_socket = None
        print(f"[+] Connection from {address[0]}:{address[1]}")
        return client_socket

    def start(self, output=None):
        """Serve exactly one session."""
        if self.server_socket is None:
            self.bind()

        client_socket = self.accept_one()
        transport = SocketTransport(client_socket)
        try:
            kx = KeyExchange(Role.SERVER, self.params, self.rng)
            self.shared_secret = kx.perform(transport)
            print(f"[✓] Session key established: {format_secret(self.shared_secret)}")

            session = ServerSession(transport, Keystream(self.shared_secret), self.settings, output)
            session.run()
        finally:
            transport.close()
            print("[-] Client disconnected")
