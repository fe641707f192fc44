"""Integer range observable."""

from collections.abc import Callable

from reactivex.abc import DisposableBase, ObserverBase, SchedulerBase

from streamcore.config import get_config
from streamcore.exceptions import InvalidArgumentError
from streamcore.observable import Observable, create
from streamcore.scheduling import resolve_scheduler, schedule_recursive


def range_(start: int, count: int, scheduler: SchedulerBase | None = None) -> Observable[int]:
    """Emit count consecutive integers beginning at start, then complete.

    Generation is self-recursive on scheduler (current-thread trampoline by default): each step
    emits one value and asks for the next index, so the call stack stays flat for any count.
    Python integers do not overflow, so start + count may exceed any machine word.
    """
    if count < 0:
        raise InvalidArgumentError(f"count must be >= 0, got {count}")
    _scheduler = resolve_scheduler(scheduler, get_config().schedulers.current_thread)

    def subscribe(
        observer: ObserverBase[int], _sched: SchedulerBase | None = None
    ) -> DisposableBase:
        def step(index: int, again: Callable[[int], None]) -> None:
            if index < count:
                observer.on_next(start + index)
                again(index + 1)
            else:
                observer.on_completed()

        return schedule_recursive(_scheduler, 0, step)

    return create(subscribe)
