"""Error-only observable."""

from typing import Any

from reactivex.abc import DisposableBase, ObserverBase, SchedulerBase

from streamcore.config import get_config
from streamcore.observable import Observable, create
from streamcore.scheduling import resolve_scheduler


def throw[T](
    error: Exception,
    scheduler: SchedulerBase | None = None,
    *,
    witness: T | None = None,
) -> Observable[T]:
    """Observable that only calls on_error(error), on the immediate scheduler by default.

    witness is never used; pass a value of the element type to pin T for type checkers.
    """
    _scheduler = resolve_scheduler(scheduler, get_config().schedulers.immediate)

    def subscribe(observer: ObserverBase[T], _sched: SchedulerBase | None = None) -> DisposableBase:
        def action(_: SchedulerBase, __: Any = None) -> None:
            observer.on_error(error)

        return _scheduler.schedule(action)

    return create(subscribe)
