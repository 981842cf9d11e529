from groupenc.utils import DeterministicRandom


def random_plaintext(group, n, rng=None):
    return [group.random_element(rng) for _ in range(n)]


class FailingRandom:
    """rng whose source is unavailable."""

    def __init__(self):
        self.calls = 0

    def randbytes(self, n):
        self.calls += 1
        raise OSError("entropy source unavailable")


class CountingRandom(DeterministicRandom):

    def __init__(self, seed):
        super().__init__(seed)
        self.calls = 0

    def randbytes(self, n):
        self.calls += 1
        return super().randbytes(n)


class ShortRandom:

    def randbytes(self, n):
        return b"\x01" * (n - 1)
