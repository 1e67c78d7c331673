from cipher_chat.common.exceptions import ConnectionClosedError


class FixedExponent:
    """Random source that always yields the same private exponent."""

    def __init__(self, value: int):
        self.value = value

    def randrange(self, start, stop):
        return self.value


class ScriptedTransport:
    """In-memory transport that records the order of operations."""

    def __init__(self, incoming: bytes = b""):
        self.incoming = incoming
        self.sent = []
        self.operations = []

    def send_bytes(self, data: bytes) -> None:
        self.operations.append("send")
        self.sent.append(data)

    def receive_exact(self, n: int) -> bytes:
        self.operations.append("receive")
        chunk, self.incoming = self.incoming[:n], self.incoming[n:]
        if len(chunk) < n:
            raise ConnectionClosedError(n, chunk)
        return chunk

    def receive_some(self, max_bytes: int) -> bytes:
        chunk, self.incoming = self.incoming[:max_bytes], self.incoming[max_bytes:]
        return chunk
