"""
Seeded pseudo-random number generator used by every generation pass.

Park-Miller "minimal standard" multiplicative LCG. Every decision in the
pipeline draws from one shared instance, so the order of draws is part of
the output contract: the same seed replays the same infinite sequence.
"""

import math
from typing import MutableSequence

MODULUS = 2147483647  # 2^31 - 1
MULTIPLIER = 16807


class SeededRandom:
    """
    Deterministic float/int source.

    Not suitable for cryptography; next_int() carries a slight low-end bias.
    """

    def __init__(self, seed: int):
        """Initialize with any integer seed, normalized into [1, MODULUS - 1]."""
        self.call_count = 0

        # Remainder keeps the sign of the seed, so negative seeds wrap upward.
        seed = int(seed)
        state = abs(seed) % MODULUS
        if seed < 0:
            state = -state
        if state <= 0:
            state += MODULUS - 1
        self.state = state

    def next(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        self.state = (self.state * MULTIPLIER) % MODULUS
        return self.state / MODULUS

    def next_int(self, min_val: int, max_val: int) -> int:
        """Random integer in [min_val, max_val], both ends inclusive."""
        return math.floor(self.next() * (max_val - min_val + 1)) + min_val

    def shuffle(self, seq: MutableSequence) -> None:
        """Fisher-Yates shuffle in place, consuming len(seq) - 1 draws."""
        for i in range(len(seq) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            seq[i], seq[j] = seq[j], seq[i]

    def index(self, length: int) -> int:
        """Uniform random index into a sequence of the given length."""
        return int(self.next() * length)
