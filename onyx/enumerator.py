# -*- coding: utf-8 -*-
"""
Exhaustive enumeration of every string over an alphabet, in odometer order.

For each length from min_length to max_length, strings are produced by
counting in base len(alphabet): the rightmost position turns fastest and
carries into its left neighbour on overflow.
"""

from typing import List, Optional, Sequence, Tuple


def keyspace_size(alphabet_size: int, min_length: int, max_length: int) -> int:
    """Sum of alphabet_size ** L for L in [min_length, max_length], exactly."""
    return sum(alphabet_size ** length for length in range(min_length, max_length + 1))


class Enumerator:
    """
    Lazy cursor over the keyspace. Holds only the current length and one
    digit per position, so memory is O(max_length) however far it has run.

    `start` is a zero-based ordinal into the full sequence; the enumerator
    jumps straight there instead of producing the earlier strings.
    """

    def __init__(self, alphabet: Sequence[str], min_length: int, max_length: int, start: int = 0):
        self.alphabet = tuple(alphabet)
        self.min_length = min_length
        self.max_length = max_length
        self.produced = 0
        self._length = min_length
        self._digits: Optional[List[int]] = [0] * min_length
        if start:
            self._seek(start)

    def __iter__(self) -> "Enumerator":
        return self

    def __next__(self) -> str:
        if self._digits is None:
            raise StopIteration
        alphabet = self.alphabet
        candidate = "".join(alphabet[i] for i in self._digits)
        self._advance()
        self.produced += 1
        return candidate

    @property
    def cursor(self) -> Optional[Tuple[int, Tuple[int, ...]]]:
        """(length, digits) of the next string, or None once exhausted."""
        if self._digits is None:
            return None
        return self._length, tuple(self._digits)

    def _advance(self) -> None:
        digits = self._digits
        radix = len(self.alphabet)
        pos = self._length - 1
        while pos >= 0:
            digits[pos] += 1
            if digits[pos] < radix:
                return
            digits[pos] = 0
            pos -= 1
        # every position wrapped: this length is done
        self._length += 1
        if self._length > self.max_length:
            self._digits = None
        else:
            self._digits = [0] * self._length

    def _seek(self, ordinal: int) -> None:
        if ordinal < 0:
            raise ValueError("start must be >= 0")
        radix = len(self.alphabet)
        length = self.min_length
        while length <= self.max_length:
            block = radix ** length
            if ordinal < block:
                break
            ordinal -= block
            length += 1
        else:
            self._digits = None
            return
        digits = [0] * length
        for pos in range(length - 1, -1, -1):
            ordinal, digits[pos] = divmod(ordinal, radix)
        self._length = length
        self._digits = digits
