"""Random byte sources injected into the interpreter."""

import random
from typing import Iterable, Optional, Protocol


class EntropySource(Protocol):
    """Anything that can produce one uniformly distributed byte."""

    def random_byte(self) -> int:
        ...


class SystemEntropy:
    """Bytes from the operating system's entropy pool."""

    def __init__(self):
        self._rng = random.SystemRandom()

    def random_byte(self) -> int:
        return self._rng.getrandbits(8)


class SeededEntropy:
    """Deterministic pseudo-random bytes for reproducible runs."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def random_byte(self) -> int:
        return self._rng.getrandbits(8)


class FixedEntropy:
    """Cycles through a fixed byte sequence."""

    def __init__(self, values: Iterable[int]):
        self._values = [v & 0xFF for v in values]
        if not self._values:
            raise ValueError("FixedEntropy needs at least one value")
        self._pos = 0

    def random_byte(self) -> int:
        value = self._values[self._pos]
        self._pos = (self._pos + 1) % len(self._values)
        return value
