# -*- coding: utf-8 -*-
"""Periodic count / percentage / throughput / ETA reporting on a status stream."""

import sys
import time
from typing import Callable, NamedTuple, Optional, TextIO

from tqdm import tqdm

DEFAULT_EVERY = 100


class ProgressSnapshot(NamedTuple):
    count: int
    total: int
    percent: int
    rate: float
    eta: Optional[int]  # whole seconds; None while the rate is still zero

    def render(self) -> str:
        rate = tqdm.format_sizeof(self.rate, " pw/s")
        eta = "?" if self.eta is None else tqdm.format_interval(self.eta)
        return "%d / %d | %d%% | %s | ETA %s" % (self.count, self.total, self.percent, rate, eta)


def measure(count: int, total: int, elapsed: float) -> ProgressSnapshot:
    """
    All arithmetic on count/total stays in integers so totals far beyond the
    float range still work. Elapsed time under one second counts as one second.
    """
    percent = min(100, max(0, count * 100 // total)) if total > 0 else 100
    divisor_ms = max(1000, int(elapsed * 1000))
    rate = count * 1000 / divisor_ms
    if count <= 0:
        eta = None
    else:
        remaining = max(0, total - count)
        eta = remaining * divisor_ms // (count * 1000)
    return ProgressSnapshot(count, total, percent, rate, eta)


class ProgressReporter:
    """
    Call tick() once per accepted candidate; it only measures and prints on
    every `every`-th one.
    """

    def __init__(
        self,
        total: int,
        every: int = DEFAULT_EVERY,
        stream: Optional[TextIO] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.total = total
        self.every = max(1, every)
        self.stream = stream if stream is not None else sys.stderr
        self.clock = clock
        self.started = clock()
        self.last: Optional[ProgressSnapshot] = None

    def tick(self, count: int) -> None:
        if count % self.every == 0:
            self.report(count)

    def report(self, count: int) -> ProgressSnapshot:
        snap = measure(count, self.total, self.clock() - self.started)
        self.last = snap
        self.stream.write("\r" + snap.render() + "   ")
        self.stream.flush()
        return snap

    def finish(self, count: int) -> ProgressSnapshot:
        snap = self.report(count)
        self.stream.write("\n")
        self.stream.flush()
        return snap
