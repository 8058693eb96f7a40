# -*- coding: utf-8 -*-
"""
Run configuration and the generation loop.

    candidates (Enumerator | Sampler) -> filter -> Sink -> every Nth: ProgressReporter
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, NamedTuple, Optional, Union

from .charsets import EXCLUSION_RULES
from .enumerator import Enumerator, keyspace_size
from .errors import ConfigurationError
from .filters import is_excluded, is_satisfiable
from .progress import ProgressReporter
from .sampler import Sampler
from .sink import Sink

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Exhaustive:
    pass


@dataclass(frozen=True)
class RandomSample:
    count: int


Mode = Union[Exhaustive, RandomSample]


@dataclass(frozen=True)
class RunConfig:
    alphabet: str
    min_length: int
    max_length: int
    mode: Mode = field(default_factory=Exhaustive)
    exclusions: FrozenSet[str] = frozenset()
    seed: Optional[int] = None

    def validate(self) -> "RunConfig":
        if not self.alphabet:
            raise ConfigurationError("Alphabet is empty; select at least one character set.")
        if len(set(self.alphabet)) != len(self.alphabet):
            raise ConfigurationError("Alphabet contains duplicate characters.")
        # one candidate per output line: no line breaks, control characters or lone surrogates
        bad = [c for c in self.alphabet if not c.isprintable()]
        if bad:
            raise ConfigurationError(
                "Alphabet contains unprintable character(s): %s" % ", ".join(ascii(c) for c in bad)
            )
        if self.min_length < 1 or self.max_length < self.min_length:
            raise ConfigurationError(
                "Invalid length range %d-%d (need 1 <= min <= max)." % (self.min_length, self.max_length)
            )
        unknown = set(self.exclusions) - EXCLUSION_RULES
        if unknown:
            raise ConfigurationError("Unknown exclusion rule(s): %s" % ", ".join(sorted(unknown)))
        if isinstance(self.mode, RandomSample):
            if self.mode.count <= 0:
                raise ConfigurationError("Requested count must be positive, got %d." % self.mode.count)
            if not is_satisfiable(self.alphabet, self.max_length, self.exclusions):
                raise ConfigurationError(
                    "Every candidate over this alphabet is excluded by %s; sampling would never finish."
                    % ", ".join(sorted(self.exclusions))
                )
        return self

    @property
    def total(self) -> int:
        """Candidates the run will deliver (exhaustive: the whole keyspace, before filtering)."""
        if isinstance(self.mode, RandomSample):
            return self.mode.count
        return keyspace_size(len(self.alphabet), self.min_length, self.max_length)


class RunResult(NamedTuple):
    written: int
    total: int
    interrupted: bool = False


def candidates(config: RunConfig) -> Iterator[str]:
    """Filtered candidate stream. Sampling retries exclusions until `count` are accepted."""
    exclusions = config.exclusions
    if isinstance(config.mode, RandomSample):
        sampler = Sampler(config.alphabet, config.min_length, config.max_length, seed=config.seed)
        if not exclusions:
            yield from sampler.sample(config.mode.count)
            return
        accepted = 0
        for candidate in sampler:
            if is_excluded(candidate, exclusions):
                continue
            yield candidate
            accepted += 1
            if accepted >= config.mode.count:
                return
    else:
        for candidate in Enumerator(config.alphabet, config.min_length, config.max_length):
            if exclusions and is_excluded(candidate, exclusions):
                continue
            yield candidate


def generate(config: RunConfig, sink: Sink, reporter: Optional[ProgressReporter] = None) -> RunResult:
    """
    Stream every accepted candidate into `sink`, draining whenever it signals
    backpressure. The sink is always drained, flushed and released, including on
    KeyboardInterrupt (reported as interrupted=True) and on write errors (re-raised).
    A ConfigurationError is raised before the sink is used; the sink is still released.
    """
    try:
        config.validate()
    except ConfigurationError:
        sink.close()
        raise
    total = config.total
    if isinstance(config.mode, Exhaustive) and not is_satisfiable(
        config.alphabet, config.max_length, config.exclusions
    ):
        log.warning("All candidates are excluded by the active filters; nothing will be written.")

    log.info(
        "Generating %s over %d character(s), length %d-%d, total %d",
        "randomly" if isinstance(config.mode, RandomSample) else "exhaustively",
        len(config.alphabet), config.min_length, config.max_length, total,
    )
    log.debug("Alphabet: %r", config.alphabet)
    log.debug("Exclusions: %s", sorted(config.exclusions))

    # count = lines the sink has taken: once write() returns,
    # the line will reach the file on close, even if drain() is interrupted.
    base = sink.lines
    count = 0
    interrupted = False
    with sink:
        try:
            for candidate in candidates(config):
                ready = sink.write(candidate)
                count = sink.lines - base
                if not ready:
                    sink.drain()
                if reporter is not None:
                    reporter.tick(count)
        except KeyboardInterrupt:
            interrupted = True
            count = sink.lines - base
            log.warning("Interrupted after %d candidate(s); flushing output.", count)

    if reporter is not None:
        reporter.finish(count)
    log.info("Done. Wrote %d candidate(s).", count)
    return RunResult(count, total, interrupted)
