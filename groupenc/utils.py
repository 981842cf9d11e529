"""Helper utility functions: randomness sources and hashing into scalars.

An rng is any object exposing `randbytes(n)` the way `random.Random` does.
Production code leaves `rng` unset, so scalars come from the group's own
source (`G1.order().random()` in petrelic); tests and benchmarks can pass a
`DeterministicRandom` to get reproducible runs.
"""

import hashlib
import struct

from groupenc.errors import RandomnessFailure

# bytes drawn per scalar; reducing 512 bits mod a ~255-bit order leaves a
# negligible bias
WIDE_BYTES = 64

MASK_PERSON = b"groupenc-mask"
H2S_PERSON = b"groupenc-h2s"
DRBG_PERSON = b"groupenc-drbg"


def random_bytes(n, rng):
    """Draw `n` bytes from `rng`.

    Parameters
    ----------
    n : int
        number of bytes
    rng : random.Random-like
        randomness source

    Returns
    -------
    bytes

    Raises
    ------
    RandomnessFailure
        if the source raises or returns the wrong number of bytes
    """
    try:
        data = rng.randbytes(n)
    except Exception as e:
        raise RandomnessFailure("randomness source failed: {}".format(e)) from e
    if not isinstance(data, (bytes, bytearray)) or len(data) != n:
        raise RandomnessFailure("randomness source returned a short read")
    return bytes(data)


def random_scalar(order, rng):
    """Sample a uniform scalar in `[1, order-1]` from `rng`."""
    k = int.from_bytes(random_bytes(WIDE_BYTES, rng), "big")
    return 1 + k % (order - 1)


def hash_to_scalar(order, *chunks, person=H2S_PERSON):
    """Hash byte strings into a scalar mod `order` with BLAKE2b-512.

    `person` separates the different uses of the hash.
    """
    h = hashlib.blake2b(digest_size=WIDE_BYTES, person=person)
    for c in chunks:
        h.update(c)
    return int.from_bytes(h.digest(), "big") % order


def index_bytes(i):
    """Fixed-width big-endian encoding of a slot index."""
    return struct.pack(">Q", i)


class DeterministicRandom:
    """Seeded BLAKE2b counter-mode generator.

    Same seed, same stream. Meant for tests and benchmarks that must be
    reproducible; the output is only as secret as the seed.

    Parameters
    ----------
    seed : bytes or int
        initial state
    """

    def __init__(self, seed):
        if isinstance(seed, int):
            seed = seed.to_bytes(max(1, (seed.bit_length() + 7) // 8), "big")
        self._key = hashlib.blake2b(bytes(seed), digest_size=32, person=DRBG_PERSON).digest()
        self._counter = 0
        self._buffer = b""

    def randbytes(self, n):
        while len(self._buffer) < n:
            block = hashlib.blake2b(struct.pack(">Q", self._counter),
                                    key=self._key, digest_size=64).digest()
            self._buffer += block
            self._counter += 1
        out, self._buffer = self._buffer[:n], self._buffer[n:]
        return out
