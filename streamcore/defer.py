"""Deferred observable construction."""

import logging
from collections.abc import Callable

from reactivex.abc import DisposableBase, ObservableBase, ObserverBase, SchedulerBase

from streamcore.exceptions import InvalidArgumentError
from streamcore.observable import Observable, create
from streamcore.throw import throw

log = logging.getLogger(__name__)


def defer[T](factory: Callable[[], ObservableBase[T]]) -> Observable[T]:
    """Build a fresh source with factory() on every subscription and subscribe to it.

    If factory() raises, the subscriber receives the exception through on_error; subscribe
    itself does not raise.

    Example:
        >>> stream = defer(lambda: return_value(time.monotonic()))
        >>> stream.subscribe(on_next=print)  # a new timestamp per subscription
    """
    if not callable(factory):
        raise InvalidArgumentError("factory must be callable")

    def subscribe(observer: ObserverBase[T], sched: SchedulerBase | None = None) -> DisposableBase:
        source: ObservableBase[T]
        try:
            source = factory()
        except Exception as e:
            log.debug("defer factory raised, forwarding to on_error: %r", e)
            source = throw(e)

        return source.subscribe(observer, scheduler=sched)

    return create(subscribe)
