"""Shared type definitions for the stream core."""

from collections.abc import Callable
from dataclasses import dataclass

from reactivex.abc import DisposableBase, ObservableBase, ObserverBase, SchedulerBase

# A producer wires an observer to its side effects and hands back the cleanup handle.
type Producer[T] = Callable[[ObserverBase[T], SchedulerBase | None], DisposableBase | None]

type Operator[T, U] = Callable[[ObservableBase[T]], ObservableBase[U]]

# Receives the current state and a continuation that requests another step.
type RecursiveAction[S] = Callable[[S, Callable[[S], None]], None]


@dataclass(frozen=True)
class Unit:
    """Zero-information value for streams that only signal that something happened."""


UNIT = Unit()
