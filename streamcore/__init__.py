"""Reactive stream core: the create primitive and canonical factory observables."""

from streamcore.config import CoreConfig, LogLevel, SchedulerSet, configure, get_config
from streamcore.defer import defer
from streamcore.empty import empty
from streamcore.exceptions import InvalidArgumentError, StreamCoreError
from streamcore.never import never
from streamcore.observable import Observable, create
from streamcore.observer import AutoDetachObserver
from streamcore.range import range_
from streamcore.repeat import repeat, repeat_source, repeat_value
from streamcore.return_value import return_value
from streamcore.scheduling import schedule_recursive
from streamcore.throw import throw
from streamcore.to_async import start, start_action, to_async, to_async_action
from streamcore.types import UNIT, Operator, Unit

__all__ = [
    "UNIT",
    "AutoDetachObserver",
    "CoreConfig",
    "InvalidArgumentError",
    "LogLevel",
    "Observable",
    "Operator",
    "SchedulerSet",
    "StreamCoreError",
    "Unit",
    "configure",
    "create",
    "defer",
    "empty",
    "get_config",
    "never",
    "range_",
    "repeat",
    "repeat_source",
    "repeat_value",
    "return_value",
    "schedule_recursive",
    "start",
    "start_action",
    "throw",
    "to_async",
    "to_async_action",
]
