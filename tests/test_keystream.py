import unittest

from cipher_chat.common.exceptions import ParameterError
from cipher_chat.crypto import Keystream, expand_seed

SECRET = 0x1F2E3D4C5B6A7988


class TestSeedExpansion(unittest.TestCase):
    def test_key_size(self):
        self.assertEqual(len(expand_seed(0)), 32)
        self.assertEqual(len(expand_seed(2**64 - 1)), 32)

    def test_deterministic(self):
        self.assertEqual(expand_seed(SECRET), expand_seed(SECRET))

    def test_distinct_seeds_distinct_keys(self):
        keys = {expand_seed(seed) for seed in range(64)}
        self.assertEqual(len(keys), 64)

    def test_rejects_out_of_range(self):
        with self.assertRaises(ParameterError):
            expand_seed(-1)
        with self.assertRaises(ParameterError):
            expand_seed(2**64)


class TestKeystream(unittest.TestCase):
    def test_same_seed_same_sequence(self):
        for n in (0, 1, 63, 64, 65, 1000):
            a = Keystream(SECRET)
            b = Keystream(SECRET)
            self.assertEqual(
                [a.next_byte() for _ in range(n)],
                [b.next_byte() for _ in range(n)],
            )

    def test_chunking_does_not_matter(self):
        a = Keystream(SECRET)
        b = Keystream(SECRET)
        whole = a.apply(bytes(300))
        pieces = b.apply(bytes(7)) + b.apply(bytes(100)) + b.apply(bytes(193))
        self.assertEqual(whole, pieces)

    def test_different_seeds_differ(self):
        a = Keystream(SECRET).apply(bytes(32))
        b = Keystream(SECRET + 1).apply(bytes(32))
        self.assertNotEqual(a, b)

    def test_bytes_in_range(self):
        for value in Keystream(SECRET).apply(bytes(512)):
            self.assertTrue(0 <= value <= 255)

    def test_position_tracks_consumption(self):
        ks = Keystream(SECRET)
        ks.apply(b"hello")
        ks.next_byte()
        self.assertEqual(ks.position, 6)

    def test_iterates(self):
        a = Keystream(SECRET)
        b = Keystream(SECRET)
        self.assertEqual([next(a) for _ in range(10)], [b.next_byte() for _ in range(10)])

    def test_round_trip(self):
        plaintext = b"hello"
        ciphertext = Keystream(SECRET).apply(plaintext)
        self.assertNotEqual(ciphertext, plaintext)
        self.assertEqual(Keystream(SECRET).apply(ciphertext), plaintext)

    def test_round_trip_across_messages(self):
        sender = Keystream(SECRET)
        receiver = Keystream(SECRET)
        for message in (b"first", "déjà vu".encode("utf-8"), b"x" * 2000):
            self.assertEqual(receiver.apply(sender.apply(message)), message)

    def test_skipped_byte_desynchronizes(self):
        plaintext = b"hello"
        ciphertext = Keystream(SECRET).apply(plaintext)

        receiver = Keystream(SECRET)
        receiver.next_byte()
        self.assertNotEqual(receiver.apply(ciphertext), plaintext)

    def test_duplicated_byte_desynchronizes(self):
        plaintext = b"hello"
        ciphertext = Keystream(SECRET).apply(plaintext)

        reference = Keystream(SECRET)
        first = reference.next_byte()
        duplicated = [first, first] + [reference.next_byte() for _ in range(3)]
        recovered = bytes(c ^ k for c, k in zip(ciphertext, duplicated))
        self.assertNotEqual(recovered, plaintext)

    def test_lost_message_desynchronizes_rest_of_session(self):
        sender = Keystream(SECRET)
        receiver = Keystream(SECRET)
        sender.apply(b"never delivered")
        second = sender.apply(b"hello again")
        self.assertNotEqual(receiver.apply(second), b"hello again")


if __name__ == "__main__":
    unittest.main()
