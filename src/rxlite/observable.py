"""Observable — a lazy, re-runnable producer of values.

An Observable holds only its producer function. Every subscribe() call
creates a fresh Subscriber and runs the producer again from scratch, so
subscriptions never share state ("cold" streams).

    def produce(subscriber):
        subscriber.next(1)
        subscriber.next(2)
        subscriber.complete()

    Observable(produce).pipe(map(lambda v, i: v * 10)).subscribe(print)
    # prints 10, then 20
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from rxlite._pipe import pipe_from_array
from rxlite.subscriber import Observer, Subscriber
from rxlite.subscription import TeardownLogic

T = TypeVar("T")
R = TypeVar("R")

Producer = Callable[[Subscriber[T]], TeardownLogic]
OperatorFunction = Callable[["Observable[T]"], "Observable[R]"]

logger = logging.getLogger("rxlite.observable")


class Observable(Generic[T]):
    """Push-based stream defined by a producer function."""

    __slots__ = ("_producer", "_label")

    def __init__(self, producer: Producer[T], label: str = "user") -> None:
        self._producer = producer
        self._label = label

    @property
    def label(self) -> str:
        return self._label

    def subscribe(
        self,
        observer: Any = None,
        *,
        error: Callable[[Any], Any] | None = None,
        complete: Callable[[], Any] | None = None,
    ) -> Subscriber[T]:
        """Activate the producer against a new Subscriber and return it.

        `observer` may be an Observer, a mapping, any object with some of
        next/error/complete, or a plain callable used for next. The error=
        and complete= keywords fill in handlers for the callable form.
        Anything the producer emits synchronously is delivered before this
        returns. Call unsubscribe() on the result to cancel.
        """
        if error is not None or complete is not None:
            base = Observer.from_partial(observer)
            observer = Observer(
                base.next,
                error if error is not None else base.error,
                complete if complete is not None else base.complete,
            )
        subscriber: Subscriber[T] = Subscriber(observer, self._label)
        logger.debug("Subscribing to %s stream", self._label)
        subscriber.add(self._producer(subscriber))
        return subscriber

    def pipe(self, *operators: OperatorFunction[Any, Any]) -> Observable[Any]:
        """Chain operators left to right. With no operators, returns self."""
        return pipe_from_array(operators)(self)

    def __repr__(self) -> str:
        return f"Observable({self._label!r})"
