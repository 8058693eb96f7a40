# -*- coding: utf-8 -*-
"""Onyx: exhaustive and random password candidate generation."""

from .engine import Exhaustive, RandomSample, RunConfig, RunResult, generate
from .enumerator import Enumerator, keyspace_size
from .errors import ConfigurationError, OnyxError, SinkError
from .filters import is_excluded, is_satisfiable
from .progress import ProgressReporter
from .sampler import Sampler
from .sink import Sink, open_sink

__version__ = "1.0.0"
