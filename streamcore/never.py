"""Non-terminating observable."""

from reactivex.abc import DisposableBase, ObserverBase, SchedulerBase
from reactivex.disposable import Disposable

from streamcore.observable import Observable, create


def never[T](*, witness: T | None = None) -> Observable[T]:
    """Observable that never calls its observer. Only disposal ends a subscription."""

    def subscribe(_obs: ObserverBase[T], _sched: SchedulerBase | None = None) -> DisposableBase:
        return Disposable()

    return create(subscribe)
