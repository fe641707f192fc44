"""Configuration types for the stream core.

Default schedulers are explicit configuration rather than hidden globals. Build a `CoreConfig`
at the composition root and install it with `configure()`; factories read it when they are
constructed, so observables built earlier keep the schedulers they were built with.
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum

from reactivex.abc import SchedulerBase
from reactivex.scheduler import (
    CurrentThreadScheduler,
    ImmediateScheduler,
    ThreadPoolScheduler,
    TrampolineScheduler,
)


class LogLevel(IntEnum):
    """Log levels mirroring Python's logging module."""

    NOTSET = logging.NOTSET
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


@dataclass(frozen=True)
class SchedulerSet:
    """Schedulers the factories fall back to when none is given.

    Attributes:
        immediate: Runs work synchronously (empty, return_value, throw)
        current_thread: Trampoline that queues nested work on the calling thread (range_,
            repeat_value, repeat, and subscription deferral in create)
        thread_pool: Background workers (start, to_async)
    """

    immediate: SchedulerBase = field(default_factory=ImmediateScheduler)
    current_thread: TrampolineScheduler = field(default_factory=CurrentThreadScheduler.singleton)
    thread_pool: SchedulerBase = field(default_factory=lambda: ThreadPoolScheduler(max_workers=4))


@dataclass(frozen=True)
class CoreConfig:
    """Static stream core configuration."""

    log_level: LogLevel = LogLevel.WARNING
    schedulers: SchedulerSet = field(default_factory=SchedulerSet)


# Module-level default config (lazy init)
_config: CoreConfig | None = None


def get_config() -> CoreConfig:
    global _config
    if _config is None:
        _config = CoreConfig()
    return _config


def configure(config: CoreConfig) -> CoreConfig:
    """Install config as the process default and apply its log level.

    Returns the previously active configuration so tests can restore it.
    """
    global _config
    previous = get_config()
    _config = config
    logging.getLogger("streamcore").setLevel(config.log_level)
    return previous
