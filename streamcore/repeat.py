"""Repeating observables: a value over and over, or a whole source resubscribed forever."""

import itertools
from collections.abc import Callable, Iterator

from reactivex.abc import DisposableBase, ObservableBase, ObserverBase, SchedulerBase
from reactivex.disposable import CompositeDisposable, SerialDisposable, SingleAssignmentDisposable

from streamcore.config import get_config
from streamcore.exceptions import InvalidArgumentError
from streamcore.observable import Observable, create
from streamcore.scheduling import resolve_scheduler, schedule_recursive
from streamcore.types import Operator


def repeat_value[T](
    value: T,
    repeat_count: int | None = None,
    scheduler: SchedulerBase | None = None,
) -> Observable[T]:
    """Emit value repeat_count times then complete; forever when repeat_count is None.

    Runs on the current-thread trampoline by default. An infinite repeat only stops when its
    subscription is disposed.
    """
    if repeat_count is not None and repeat_count < 0:
        raise InvalidArgumentError(f"repeat_count must be >= 0, got {repeat_count}")
    _scheduler = resolve_scheduler(scheduler, get_config().schedulers.current_thread)

    if repeat_count is None:

        def subscribe_forever(
            observer: ObserverBase[T], _sched: SchedulerBase | None = None
        ) -> DisposableBase:
            def step(_: None, again: Callable[[None], None]) -> None:
                observer.on_next(value)
                again(None)

            return schedule_recursive(_scheduler, None, step)

        return create(subscribe_forever)

    def subscribe(observer: ObserverBase[T], _sched: SchedulerBase | None = None) -> DisposableBase:
        remaining = repeat_count

        def step(_: None, again: Callable[[None], None]) -> None:
            nonlocal remaining
            if remaining > 0:
                observer.on_next(value)
                remaining -= 1

            # completes on the step that emitted the last value
            if remaining == 0:
                observer.on_completed()
                return

            again(None)

        return schedule_recursive(_scheduler, None, step)

    return create(subscribe)


def _concat[T](
    sources: Callable[[], Iterator[ObservableBase[T]]],
    scheduler: SchedulerBase,
) -> Observable[T]:
    def subscribe(observer: ObserverBase[T], sched: SchedulerBase | None = None) -> DisposableBase:
        remaining = sources()
        current = SerialDisposable()

        def step(_: None, again: Callable[[None], None]) -> None:
            try:
                source = next(remaining)
            except StopIteration:
                observer.on_completed()
                return

            inner = SingleAssignmentDisposable()
            current.disposable = inner
            inner.disposable = source.subscribe(
                observer.on_next,
                observer.on_error,
                lambda: again(None),
                scheduler=sched,
            )

        return CompositeDisposable(schedule_recursive(scheduler, None, step), current)

    return create(subscribe)


def repeat[T](source: ObservableBase[T]) -> Observable[T]:
    """Resubscribe to source every time it completes, indefinitely.

    Successive subscriptions are chained through the current-thread trampoline, so a source
    that completes synchronously does not deepen the stack. An error from source ends the
    repetition.
    """
    if not isinstance(source, ObservableBase):
        raise InvalidArgumentError(f"expected an observable, got {type(source).__name__}")
    return _concat(lambda: itertools.repeat(source), get_config().schedulers.current_thread)


def repeat_source[T]() -> Operator[T, T]:
    """Pipeable form of repeat: `source.pipe(repeat_source())`."""

    def _operator(source: ObservableBase[T]) -> Observable[T]:
        return repeat(source)

    return _operator
