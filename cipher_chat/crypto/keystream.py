"""
Keystream Generator

Deterministic pseudorandom byte source seeded with the 64-bit DH shared
secret. Both peers build one from the same secret and XOR application bytes
with it, so each side must consume exactly one keystream byte per byte that
crosses the wire, in wire order. There is no way to resynchronize: once the
two cursors drift apart every later byte decodes to garbage.

The byte sequence matches a ChaCha20 RNG seeded through PCG32 expansion
(``seed_from_u64``) that yields the low byte of each 32-bit output word:
    key    = PCG32(seed) -> 8 little-endian u32 words (32 bytes)
    stream = ChaCha20(key, nonce=0, counter=0)
    byte_i = stream[4 * i]
The secret is used directly as the seed, without any key derivation step.
"""

from typing import Iterator
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from cipher_chat.common.exceptions import ParameterError
from cipher_chat.common.protocol import U64_MAX

PCG_MULTIPLIER = 6364136223846793005
PCG_INCREMENT = 11634580456548141115

KEY_SIZE = 32
WORD_SIZE = 4
# 4 ChaCha20 blocks per refill
REFILL_SIZE = 256

_U64_MASK = U64_MAX
_U32_MASK = 0xFFFFFFFF


def _rotate_right_32(x: int, r: int) -> int:
    r &= 31
    return ((x >> r) | (x << (32 - r))) & _U32_MASK


def expand_seed(seed: int) -> bytes:
    """
    Expand a 64-bit seed into a 32-byte ChaCha20 key using PCG32.

    Args:
        seed: Unsigned 64-bit seed

    Returns:
        32-byte key
    """
    if not 0 <= seed <= U64_MAX:
        raise ParameterError(f"Seed outside unsigned 64-bit range: {seed}")

    state = seed
    key = bytearray()
    for _ in range(KEY_SIZE // WORD_SIZE):
        state = (state * PCG_MULTIPLIER + PCG_INCREMENT) & _U64_MASK
        xorshifted = (((state >> 18) ^ state) >> 27) & _U32_MASK
        word = _rotate_right_32(xorshifted, state >> 59)
        key.extend(word.to_bytes(WORD_SIZE, 'little'))
    return bytes(key)


class Keystream:
    """
    Infinite, non-restartable keystream.

    Example: Encrypt on one side, decrypt on the other

    >>> ct = Keystream(secret).apply(b"hello")
    >>> Keystream(secret).apply(ct)
    b'hello'
    """

    def __init__(self, seed: int):
        key = expand_seed(seed)
        # 16-byte nonce = 4-byte little-endian block counter || 12-byte nonce
        cipher = Cipher(algorithms.ChaCha20(key, bytes(16)), mode=None)
        self._encryptor = cipher.encryptor()
        self._block = b""
        self._offset = 0
        self.position = 0

    def next_byte(self) -> int:
        """Return the next keystream byte and advance the cursor."""
        if self._offset >= len(self._block):
            self._block = self._encryptor.update(bytes(REFILL_SIZE))
            self._offset = 0
        value = self._block[self._offset]
        self._offset += WORD_SIZE
        self.position += 1
        return value

    def apply(self, data: bytes) -> bytes:
        """
        XOR ``data`` with the next ``len(data)`` keystream bytes.

        Encryption and decryption are the same operation.
        """
        return bytes(b ^ self.next_byte() for b in data)

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        return self.next_byte()
