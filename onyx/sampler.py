# -*- coding: utf-8 -*-
"""Random candidate drawing."""

import random
from typing import Iterator, Optional, Sequence


class Sampler:
    """
    Draws candidates with a length picked uniformly from [min_length, max_length]
    and each character picked uniformly from the alphabet. Duplicates are allowed.
    Uses a private, non-cryptographic PRNG.
    """

    def __init__(
        self,
        alphabet: Sequence[str],
        min_length: int,
        max_length: int,
        seed: Optional[int] = None,
    ):
        self.alphabet = tuple(alphabet)
        self.min_length = min_length
        self.max_length = max_length
        self._rng = random.Random(seed)

    def draw(self) -> str:
        rng = self._rng
        length = rng.randint(self.min_length, self.max_length)
        return "".join(rng.choice(self.alphabet) for _ in range(length))

    def sample(self, count: int) -> Iterator[str]:
        """Exactly `count` independent draws."""
        for _ in range(count):
            yield self.draw()

    def __iter__(self) -> Iterator[str]:
        # endless: the caller decides when enough candidates were accepted
        while True:
            yield self.draw()
