"""Single-value observable."""

from typing import Any

from reactivex.abc import DisposableBase, ObserverBase, SchedulerBase

from streamcore.config import get_config
from streamcore.observable import Observable, create
from streamcore.scheduling import resolve_scheduler


def return_value[T](value: T, scheduler: SchedulerBase | None = None) -> Observable[T]:
    """Emit value then complete, both in one unit of work on scheduler (immediate by default)."""
    _scheduler = resolve_scheduler(scheduler, get_config().schedulers.immediate)

    def subscribe(observer: ObserverBase[T], _sched: SchedulerBase | None = None) -> DisposableBase:
        def action(_: SchedulerBase, __: Any = None) -> None:
            observer.on_next(value)
            observer.on_completed()

        return _scheduler.schedule(action)

    return create(subscribe)
