"""Auto-detaching safety wrapper around consumer observers."""

import logging
import threading

from reactivex.abc import ObserverBase
from reactivex.disposable import SingleAssignmentDisposable

log = logging.getLogger(__name__)


class AutoDetachObserver[T](ObserverBase[T]):
    """Forwards to observer until the first terminal call, then releases subscription.

    The wrapper enforces the observer grammar regardless of producer discipline: values are
    dropped once the sequence has terminated or the subscription has been disposed, and only
    the first of on_error / on_completed is delivered.
    """

    def __init__(self, observer: ObserverBase[T], subscription: SingleAssignmentDisposable) -> None:
        self._observer = observer
        self._subscription = subscription
        self._lock = threading.Lock()
        self.is_stopped = False

    @property
    def is_live(self) -> bool:
        return not (self.is_stopped or self._subscription.is_disposed)

    def on_next(self, value: T) -> None:
        if not self.is_live:
            log.debug("dropped on_next after detach: %r", value)
            return
        self._observer.on_next(value)

    def on_error(self, error: Exception) -> None:
        if not self._stop():
            log.debug("dropped on_error after detach: %r", error)
            return
        try:
            self._observer.on_error(error)
        finally:
            self._subscription.dispose()

    def on_completed(self) -> None:
        if not self._stop():
            log.debug("dropped on_completed after detach")
            return
        try:
            self._observer.on_completed()
        finally:
            self._subscription.dispose()

    def _stop(self) -> bool:
        """Claim the single terminal call. False if it was already claimed or detached."""
        with self._lock:
            if not self.is_live:
                return False
            self.is_stopped = True
            return True
