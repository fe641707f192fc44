"""Bridge synchronous callables into single-result observables.

Each invocation runs the callable once on a scheduler (a thread pool by default) and publishes
its outcome through an AsyncSubject, so subscribers that arrive after the callable finished
still receive the result or the error.
"""

import logging
from collections.abc import Callable
from typing import Any

from reactivex.abc import DisposableBase, ObserverBase, SchedulerBase
from reactivex.subject import AsyncSubject

from streamcore.config import get_config
from streamcore.exceptions import InvalidArgumentError
from streamcore.observable import Observable, create
from streamcore.scheduling import resolve_scheduler
from streamcore.types import UNIT, Unit

log = logging.getLogger(__name__)


def _hide[T](subject: AsyncSubject[T]) -> Observable[T]:
    def subscribe(observer: ObserverBase[T], sched: SchedulerBase | None = None) -> DisposableBase:
        return subject.subscribe(observer, scheduler=sched)

    return create(subscribe)


def to_async[T](
    function: Callable[[], T],
    scheduler: SchedulerBase | None = None,
) -> Callable[[], Observable[T]]:
    """Convert function into a factory; each call runs function once on scheduler.

    The returned observable emits the function's result then completes, or emits only the
    exception the function raised.

    Example:
        >>> load = to_async(lambda: read_config(path))
        >>> load().subscribe(on_next=apply, on_error=report)
    """
    if not callable(function):
        raise InvalidArgumentError("function must be callable")
    _scheduler = resolve_scheduler(scheduler, get_config().schedulers.thread_pool)

    def invoke() -> Observable[T]:
        subject: AsyncSubject[T] = AsyncSubject()

        def action(_: SchedulerBase, __: Any = None) -> None:
            try:
                result = function()
            except Exception as e:
                log.debug("to_async function raised: %r", e)
                subject.on_error(e)
                return
            subject.on_next(result)
            subject.on_completed()

        _scheduler.schedule(action)
        return _hide(subject)

    return invoke


def to_async_action(
    action: Callable[[], None],
    scheduler: SchedulerBase | None = None,
) -> Callable[[], Observable[Unit]]:
    """Like to_async, for callables run for their side effects; emits UNIT on success."""
    if not callable(action):
        raise InvalidArgumentError("action must be callable")

    def run() -> Unit:
        action()
        return UNIT

    return to_async(run, scheduler)


def start[T](function: Callable[[], T], scheduler: SchedulerBase | None = None) -> Observable[T]:
    """Run function now on scheduler and return an observable of its single outcome."""
    return to_async(function, scheduler)()


def start_action(
    action: Callable[[], None],
    scheduler: SchedulerBase | None = None,
) -> Observable[Unit]:
    """Run action now on scheduler; emits UNIT when it returns."""
    return to_async_action(action, scheduler)()
