"""Tests for create and the auto-detaching subscription."""

import threading
from typing import Any
from unittest.mock import Mock, call

import pytest
from reactivex import operators as ops
from reactivex.abc import DisposableBase, ObserverBase, SchedulerBase
from reactivex.disposable import Disposable, SingleAssignmentDisposable
from reactivex.scheduler import CurrentThreadScheduler

from streamcore import AutoDetachObserver, InvalidArgumentError, create


def test_create_rejects_missing_producer() -> None:
    """A None or non-callable producer fails at construction."""
    with pytest.raises(InvalidArgumentError):
        create(None)  # type: ignore[arg-type]

    with pytest.raises(InvalidArgumentError):
        create("not a producer")  # type: ignore[arg-type]


def test_create_delivers_to_callbacks() -> None:
    """Producer calls reach the callbacks in order."""
    results: list[int] = []
    completed: list[bool] = []

    def subscribe(obs: ObserverBase[int], _scheduler: SchedulerBase | None = None) -> DisposableBase:
        obs.on_next(1)
        obs.on_next(2)
        obs.on_completed()
        return Disposable()

    create(subscribe).subscribe(
        on_next=results.append,
        on_completed=lambda: completed.append(True),
    )

    assert results == [1, 2]
    assert completed == [True]


def test_create_runs_producer_per_subscription() -> None:
    """Each subscription runs the producer again."""
    producer = Mock(return_value=Disposable())
    source = create(producer)

    source.subscribe()
    source.subscribe()

    assert producer.call_count == 2


def test_completion_detaches_observer(observer: Mock) -> None:
    """Calls made after on_completed are dropped and the subscription is disposed."""

    def subscribe(obs: ObserverBase[str], _scheduler: SchedulerBase | None = None) -> DisposableBase:
        obs.on_next("a")
        obs.on_completed()
        obs.on_next("b")
        obs.on_error(ValueError("late"))
        obs.on_completed()
        return Disposable()

    subscription = create(subscribe).subscribe(observer)

    assert observer.mock_calls == [call.on_next("a"), call.on_completed()]
    assert subscription.is_disposed  # type: ignore[attr-defined]


def test_error_is_delivered_once(observer: Mock) -> None:
    """Only the first terminal call is forwarded."""
    first = ValueError("first")

    def subscribe(obs: ObserverBase[int], _scheduler: SchedulerBase | None = None) -> DisposableBase:
        obs.on_error(first)
        obs.on_error(ValueError("second"))
        obs.on_completed()
        return Disposable()

    subscription = create(subscribe).subscribe(observer)

    assert observer.mock_calls == [call.on_error(first)]
    assert subscription.is_disposed  # type: ignore[attr-defined]


def test_terminated_producer_resource_is_released() -> None:
    """The producer's disposable is disposed even though it is returned after completion."""
    resource = Mock(spec=DisposableBase)

    def subscribe(obs: ObserverBase[int], _scheduler: SchedulerBase | None = None) -> DisposableBase:
        obs.on_completed()
        return resource

    create(subscribe).subscribe()

    resource.dispose.assert_called_once()


def test_dispose_stops_delivery(observer: Mock) -> None:
    """After dispose, producer-side triggers no longer reach the observer."""
    captured: list[ObserverBase[int]] = []

    def subscribe(obs: ObserverBase[int], _scheduler: SchedulerBase | None = None) -> DisposableBase:
        captured.append(obs)
        return Disposable()

    subscription = create(subscribe).subscribe(observer)
    captured[0].on_next(1)
    subscription.dispose()
    captured[0].on_next(2)
    captured[0].on_completed()

    assert observer.mock_calls == [call.on_next(1)]


def test_subscribe_inside_trampoline_is_deferred() -> None:
    """Subscribing while the trampoline runs queues the producer behind the current unit."""
    events: list[Any] = []

    def subscribe(obs: ObserverBase[int], _scheduler: SchedulerBase | None = None) -> DisposableBase:
        events.append("produce")
        obs.on_next(1)
        obs.on_completed()
        return Disposable()

    def action(_: SchedulerBase, __: Any = None) -> None:
        create(subscribe).subscribe(on_next=events.append)
        events.append("subscribed")

    CurrentThreadScheduler.singleton().schedule(action)

    assert events == ["subscribed", "produce", 1]


def test_dispose_before_deferred_producer_skips_it() -> None:
    """A subscription cancelled before its queued producer runs never starts the producer."""
    producer = Mock(return_value=Disposable())

    def action(_: SchedulerBase, __: Any = None) -> None:
        subscription = create(producer).subscribe()
        subscription.dispose()

    CurrentThreadScheduler.singleton().schedule(action)

    producer.assert_not_called()


def test_producer_exception_propagates() -> None:
    """Errors raised by the producer itself escape subscribe."""

    def subscribe(_obs: ObserverBase[int], _scheduler: SchedulerBase | None = None) -> DisposableBase:
        raise RuntimeError("broken producer")

    with pytest.raises(RuntimeError, match="broken producer"):
        create(subscribe).subscribe()


def test_producer_may_return_none() -> None:
    """A producer without cleanup can return None."""

    def subscribe(obs: ObserverBase[int], _scheduler: SchedulerBase | None = None) -> None:
        obs.on_next(7)

    results: list[int] = []
    subscription = create(subscribe).subscribe(on_next=results.append)
    subscription.dispose()

    assert results == [7]


def test_pipe_composes_reactivex_operators() -> None:
    """reactivex operators apply through pipe."""

    def subscribe(obs: ObserverBase[int], _scheduler: SchedulerBase | None = None) -> DisposableBase:
        for i in range(5):
            obs.on_next(i)
        obs.on_completed()
        return Disposable()

    results: list[int] = []
    create(subscribe).pipe(
        ops.filter(lambda x: x % 2 == 0),
        ops.map(lambda x: x * 10),
    ).subscribe(on_next=results.append)

    assert results == [0, 20, 40]


def test_concurrent_terminal_calls_forward_exactly_one(observer: Mock) -> None:
    """Racing on_completed / on_error from many threads delivers a single terminal call."""
    subscription = SingleAssignmentDisposable()
    safe = AutoDetachObserver(observer, subscription)
    barrier = threading.Barrier(8)

    def finish(index: int) -> None:
        barrier.wait()
        if index % 2:
            safe.on_error(ValueError(index))
        else:
            safe.on_completed()

    threads = [threading.Thread(target=finish, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=2.0)

    assert len(observer.mock_calls) == 1
    assert subscription.is_disposed
