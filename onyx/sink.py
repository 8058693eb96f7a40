# -*- coding: utf-8 -*-
"""
Line-oriented output with explicit backpressure.

Protocol: write() buffers one encoded line and returns False once the buffer
reaches its high-water mark; the caller then calls drain(), which blocks
until the underlying stream has taken every buffered byte. A stream that
cannot take data right now (non-blocking raw write returning None, or
BlockingIOError from a buffered one) is waited on with select() rather than
spun on.
"""

import gzip
import io
import logging
import os
import select
import time
from typing import BinaryIO, Callable, Optional

from .errors import SinkError

log = logging.getLogger(__name__)

DEFAULT_HIGH_WATER_MARK = 64 * 1024


class Sink:
    def __init__(
        self,
        stream: BinaryIO,
        high_water_mark: int = DEFAULT_HIGH_WATER_MARK,
        newline: str = os.linesep,
        encoding: str = "utf-8",
        close_stream: bool = True,
        wait: Optional[Callable[[], None]] = None,
        poll_interval: float = 0.05,
    ):
        self._stream = stream
        self._buffer = bytearray()
        self._newline = newline
        self._encoding = encoding
        self._close_stream = close_stream
        self._wait = wait
        self.high_water_mark = max(1, high_water_mark)
        self.poll_interval = poll_interval
        self.lines = 0
        self.waits = 0
        self.closed = False

    # -------- Context management --------
    def __enter__(self) -> "Sink":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.close()
            return False
        # Already failing: still push out accepted lines, then let the first error propagate.
        try:
            self.close()
        except OSError as err:
            log.error("Could not flush output while handling %s: %s", exc_type.__name__, err)
        return False

    # -------- Writing --------
    def write(self, candidate: str) -> bool:
        """Queue one line. Returns False when the caller must drain() before writing more."""
        if self.closed:
            raise SinkError("write to closed sink")
        self._buffer += (candidate + self._newline).encode(self._encoding)
        self.lines += 1
        return len(self._buffer) < self.high_water_mark

    def drain(self) -> None:
        """Push the whole buffer into the stream, suspending while it is not writable."""
        buf = self._buffer
        while buf:
            start = self._tell()
            pending = len(buf)
            try:
                with memoryview(buf) as view:
                    written = self._stream.write(view)
            except BlockingIOError as exc:
                written = exc.characters_written
                if written:
                    del buf[:written]
                self._wait_writable()
                continue
            except OSError as exc:
                raise SinkError("write failed: %s" % exc) from exc
            except BaseException:
                # interrupted mid-write: never hand the stream the same bytes twice
                self._settle_interrupted(start, pending)
                raise
            if not written:
                self._wait_writable()
                continue
            del buf[:written]

    def close(self) -> None:
        """Drain, flush and release. Safe to call more than once."""
        if self.closed:
            return
        try:
            self.drain()
            self._flush_stream()
        finally:
            self.closed = True
            self._release()

    # -------- Internals --------
    def _flush_stream(self) -> None:
        flush = getattr(self._stream, "flush", None)
        if flush is None:
            return
        while True:
            try:
                flush()
                return
            except BlockingIOError:
                self._wait_writable()
            except OSError as exc:
                raise SinkError("flush failed: %s" % exc) from exc

    def _release(self) -> None:
        if not self._close_stream:
            return
        try:
            self._stream.close()
        except OSError as exc:
            raise SinkError("close failed: %s" % exc) from exc

    def _tell(self) -> Optional[int]:
        try:
            return self._stream.tell()
        except (AttributeError, OSError, ValueError):
            return None

    def _settle_interrupted(self, start: Optional[int], pending: int) -> None:
        """
        Drop whatever part of the buffer the stream took before being interrupted.
        The stream offset tells how much that was; without one, the whole write is
        assumed to have landed.
        """
        end = self._tell() if start is not None else None
        if end is None:
            taken = pending
        else:
            taken = min(max(0, end - start), pending)
        del self._buffer[:taken]

    def _wait_writable(self) -> None:
        self.waits += 1
        if self._wait is not None:
            self._wait()
            return
        try:
            fd = self._stream.fileno()
        except (AttributeError, OSError, ValueError):
            fd = None
        if fd is None:
            time.sleep(self.poll_interval)
        else:
            select.select([], [fd], [])


def open_sink(path: str, **kwargs) -> Sink:
    """Open `path` for appending (gzip when it ends with .gz) and wrap it in a Sink."""
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        if path.endswith(".gz"):
            log.info("Appending gzip: %s", path)
            stream = gzip.open(path, "ab")
        else:
            log.info("Appending: %s", path)
            stream = open(path, "ab")
    except OSError as exc:
        raise SinkError("cannot open %s for writing: %s" % (path, exc)) from exc
    return Sink(stream, **kwargs)


def wrap_stream(stream: BinaryIO, **kwargs) -> Sink:
    """Sink over an already-open stream such as stdout; the stream is flushed but left open."""
    if isinstance(stream, io.TextIOBase):
        stream.flush()
        stream = stream.buffer
    kwargs.setdefault("close_stream", False)
    return Sink(stream, **kwargs)
