"""Subscriber — the receiving end of one subscription.

Wraps a (possibly partial) Observer and enforces terminal-event semantics:
once error() or complete() has run, nothing else reaches the observer.
complete() also tears the subscription down; error() does not.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from rxlite.subscription import Subscription, TeardownLogic

T = TypeVar("T")

logger = logging.getLogger("rxlite.subscriber")


@dataclass(frozen=True)
class Observer(Generic[T]):
    """Handlers for the three notification kinds. Any of them may be None."""

    next: Callable[[T], Any] | None = None
    error: Callable[[Any], Any] | None = None
    complete: Callable[[], Any] | None = None

    @classmethod
    def from_partial(cls, observer: Any = None) -> Observer:
        """Normalise whatever was handed to subscribe() into an Observer.

        Accepts None, an Observer, a mapping with next/error/complete keys,
        a bare callable (used as next), or any object exposing some of
        next/error/complete as methods.
        """
        if observer is None:
            return cls()
        if isinstance(observer, Observer):
            return observer
        if isinstance(observer, Mapping):
            return cls(observer.get("next"), observer.get("error"), observer.get("complete"))
        if callable(observer):
            return cls(next=observer)
        return cls(
            _handler(observer, "next"),
            _handler(observer, "error"),
            _handler(observer, "complete"),
        )


def _handler(obj: Any, name: str) -> Callable | None:
    fn = getattr(obj, name, None)
    return fn if callable(fn) else None


class Subscriber(Generic[T]):
    """Observer wrapper that owns the Subscription for one activation."""

    __slots__ = ("_observer", "_label", "_stopped", "_subscription")

    def __init__(self, observer: Any = None, label: str = "user") -> None:
        self._observer: Observer[T] = Observer.from_partial(observer)
        self._label = label
        self._stopped = False
        self._subscription = Subscription()

    @property
    def label(self) -> str:
        return self._label

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def closed(self) -> bool:
        return self._subscription.closed

    def next(self, value: T) -> None:
        if self._stopped:
            return
        if self._observer.next is not None:
            self._observer.next(value)

    def error(self, err: Any) -> None:
        if self._stopped:
            return
        self._stopped = True
        if self._observer.error is not None:
            self._observer.error(err)
        else:
            logger.debug("Unhandled error on %s stream dropped: %r", self._label, err)

    def complete(self) -> None:
        if not self._stopped:
            self._stopped = True
            if self._observer.complete is not None:
                self._observer.complete()
        # Teardown runs on every complete(), even after an error.
        self.unsubscribe()

    # --- Subscription delegation ---

    def add(self, teardown: TeardownLogic) -> None:
        self._subscription.add(teardown)

    def unsubscribe(self) -> None:
        self._subscription.unsubscribe()

    def __repr__(self) -> str:
        state = "stopped" if self._stopped else "active"
        return f"Subscriber({self._label!r}, {state})"
