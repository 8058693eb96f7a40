import io

import pytest


class SlowStream(io.RawIOBase):
    """
    Raw stream that takes at most `chunk` bytes per write and reports
    "would block" (None) on every `stall_every`-th call.
    """

    def __init__(self, chunk=7, stall_every=3):
        self.data = bytearray()
        self.chunk = chunk
        self.stall_every = stall_every
        self.calls = 0
        self.flushes = 0

    def writable(self):
        return True

    def write(self, b):
        self.calls += 1
        if self.stall_every and self.calls % self.stall_every == 0:
            return None
        piece = bytes(b[: self.chunk])
        self.data += piece
        return len(piece)

    def flush(self):
        self.flushes += 1


class FailingStream(io.RawIOBase):
    """Accepts `budget` bytes in total, then fails like a full disk."""

    def __init__(self, budget):
        self.data = bytearray()
        self.budget = budget

    def writable(self):
        return True

    def write(self, b):
        room = self.budget - len(self.data)
        if room <= 0:
            raise OSError(28, "No space left on device")
        piece = bytes(b[:room])
        self.data += piece
        return len(piece)


class FakeClock:
    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def slow_stream():
    return SlowStream()


@pytest.fixture
def clock():
    return FakeClock()


class InterruptedStream(io.RawIOBase):
    """
    Stores up to `keep` bytes of its first write (all of them when None),
    then raises KeyboardInterrupt as if Ctrl-C landed mid-write. Later
    writes go through. With `offsets`, tell() reports the bytes stored.
    """

    def __init__(self, keep=None, offsets=False):
        self.data = bytearray()
        self.keep = keep
        self.offsets = offsets
        self.interrupted = False

    def writable(self):
        return True

    def seekable(self):
        return self.offsets

    def tell(self):
        if not self.offsets:
            raise io.UnsupportedOperation("tell")
        return len(self.data)

    def write(self, b):
        data = bytes(b)
        if not self.interrupted:
            self.interrupted = True
            self.data += data if self.keep is None else data[: self.keep]
            raise KeyboardInterrupt
        self.data += data
        return len(data)


class InterruptOnce:
    """Backpressure wait that raises KeyboardInterrupt the first time only."""

    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls == 1:
            raise KeyboardInterrupt
