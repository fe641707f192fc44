"""Scheduler helpers: argument resolution, trampoline detection and self-recursive work."""

import threading
from collections import deque

from reactivex.abc import DisposableBase, SchedulerBase
from reactivex.disposable import SerialDisposable
from reactivex.scheduler import TrampolineScheduler

from streamcore.exceptions import InvalidArgumentError
from streamcore.types import RecursiveAction


def resolve_scheduler(scheduler: SchedulerBase | None, default: SchedulerBase) -> SchedulerBase:
    """Return scheduler, or default when it is None."""
    if scheduler is None:
        return default
    if not isinstance(scheduler, SchedulerBase):
        raise InvalidArgumentError(f"expected a scheduler, got {type(scheduler).__name__}")
    return scheduler


def trampoline_active(current_thread: TrampolineScheduler) -> bool:
    """True while the calling thread is already inside the trampoline's run loop."""
    return not current_thread.schedule_required()


class RecursiveWork[S](DisposableBase):
    """Drives a self-recursive action on a scheduler without growing the call stack.

    Each call to the continuation queues one state. Queued states are drained by a loop: when
    the scheduler ran the drain inline (immediate scheduler, idle trampoline) the loop keeps
    going on the same frame; when the drain was queued by the scheduler, every further step is
    handed back to the scheduler as a new unit of work so other queued work can interleave.
    """

    def __init__(self, scheduler: SchedulerBase, action: RecursiveAction[S]) -> None:
        self._scheduler = scheduler
        self._action = action
        self._lock = threading.Lock()
        self._pending: deque[S] = deque()
        self._active = False
        self._dispatches = 0
        self._current = SerialDisposable()
        self.is_disposed = False

    def request(self, state: S) -> None:
        with self._lock:
            if self.is_disposed:
                return
            self._pending.append(state)
            if self._active:
                # the running drain picks it up
                return
            self._active = True
        self._dispatch()

    def dispose(self) -> None:
        with self._lock:
            if self.is_disposed:
                return
            self.is_disposed = True
            self._pending.clear()
        self._current.dispose()

    def _dispatch(self) -> None:
        caller = threading.get_ident()
        dispatching = True
        with self._lock:
            self._dispatches += 1
            ticket = self._dispatches

        def drain(_scheduler: SchedulerBase, _state: None = None) -> None:
            self._drain(inline=dispatching and threading.get_ident() == caller)

        disposable = self._scheduler.schedule(drain)
        dispatching = False
        # an older unit has already run when a newer dispatch exists; it must not replace it
        with self._lock:
            if ticket == self._dispatches:
                self._current.disposable = disposable

    def _drain(self, inline: bool) -> None:
        while True:
            with self._lock:
                if self.is_disposed or not self._pending:
                    self._active = False
                    return
                state = self._pending.popleft()

            try:
                self._action(state, self.request)
            except BaseException:
                with self._lock:
                    self._active = False
                raise

            if not inline:
                with self._lock:
                    if self.is_disposed or not self._pending:
                        self._active = False
                        return
                self._dispatch()
                return


def schedule_recursive[S](
    scheduler: SchedulerBase,
    state: S,
    action: RecursiveAction[S],
) -> DisposableBase:
    """Schedule action(state, again); calling again(next_state) runs another step.

    Example:
        >>> def count_down(n: int, again: Callable[[int], None]) -> None:
        ...     print(n)
        ...     if n:
        ...         again(n - 1)
        >>> schedule_recursive(ImmediateScheduler(), 3, count_down)
    """
    work = RecursiveWork(scheduler, action)
    work.request(state)
    return work
