"""The create primitive: observables built from a producer function."""

import logging
from collections.abc import Callable
from functools import reduce
from typing import Any

from reactivex.abc import DisposableBase, ObservableBase, ObserverBase, SchedulerBase
from reactivex.disposable import Disposable, SingleAssignmentDisposable
from reactivex.observer import Observer

from streamcore.config import get_config
from streamcore.exceptions import InvalidArgumentError
from streamcore.observer import AutoDetachObserver
from streamcore.scheduling import trampoline_active
from streamcore.types import Operator, Producer

log = logging.getLogger(__name__)


class Observable[T](ObservableBase[T]):
    """An observable whose subscriptions run a producer against a safety-wrapped observer.

    Every subscription:
        - returns a SingleAssignmentDisposable straight away, so the caller can cancel before
          the producer has started
        - wraps the observer in an AutoDetachObserver bound to that disposable, so the first
          terminal call releases the subscription
        - runs the producer inline, unless the calling thread is already draining the
          current-thread trampoline, in which case the producer is queued behind the running
          unit of work (re-entrant resubscription stays flat)

    Exceptions raised by the producer itself are not caught here.
    """

    def __init__(self, subscribe: Producer[T]) -> None:
        if subscribe is None or not callable(subscribe):
            raise InvalidArgumentError("subscribe must be a callable producer")
        self._subscribe = subscribe

    def subscribe(
        self,
        on_next: ObserverBase[T] | Callable[[T], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
        on_completed: Callable[[], None] | None = None,
        *,
        scheduler: SchedulerBase | None = None,
    ) -> DisposableBase:
        observer: ObserverBase[T]
        if isinstance(on_next, ObserverBase):
            observer = on_next
        else:
            observer = Observer(on_next, on_error, on_completed)

        subscription = SingleAssignmentDisposable()
        safe_observer = AutoDetachObserver(observer, subscription)

        def set_subscription(_scheduler: SchedulerBase | None = None, _state: Any = None) -> None:
            if subscription.is_disposed:
                return
            disposable = self._subscribe(safe_observer, scheduler)
            subscription.disposable = disposable if disposable is not None else Disposable()

        current_thread = get_config().schedulers.current_thread
        if trampoline_active(current_thread):
            log.debug("trampoline running, deferring subscription to %r", self)
            current_thread.schedule(set_subscription)
        else:
            set_subscription()

        return subscription

    def pipe(self, *operators: Operator[Any, Any]) -> ObservableBase[Any]:
        """Compose operators left to right, e.g. `source.pipe(ops.take(3))`."""
        return reduce(lambda source, operator: operator(source), operators, self)


def create[T](subscribe: Producer[T]) -> Observable[T]:
    """Create an observable from a producer. Observers detach on error or completion.

    Example:
        >>> def subscribe(observer: ObserverBase[int], _scheduler: SchedulerBase | None = None):
        ...     observer.on_next(42)
        ...     observer.on_completed()
        ...     return Disposable()
        >>> create(subscribe).subscribe(on_next=print)
    """
    return Observable(subscribe)
