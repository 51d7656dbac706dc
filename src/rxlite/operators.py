"""Operators — factories returning Observable-to-Observable transforms.

Each operator wraps its upstream in a new Observable whose producer
subscribes upstream and returns that upstream subscription, so
unsubscribing downstream cancels the whole chain. Use them through pipe():

    source.pipe(map(lambda v, i: v * 2), debounce_time(0.25))
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, TypeVar

from rxlite.observable import Observable, OperatorFunction
from rxlite.scheduler import Scheduler, get_scheduler
from rxlite.subscriber import Observer, Subscriber

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger("rxlite.operators")


def map(project: Callable[[T, int], R]) -> OperatorFunction[T, R]:
    """Transform each value with project(value, index).

    The index counts from 0 separately for every subscription.
    """

    def operator(source: Observable[T]) -> Observable[R]:
        def produce(subscriber: Subscriber[R]):
            index = 0

            def on_next(value: T) -> None:
                nonlocal index
                i = index
                index += 1
                subscriber.next(project(value, i))

            return source.subscribe(Observer(on_next, subscriber.error, subscriber.complete))

        return Observable(produce, "map")

    return operator


def filter(predicate: Callable[[T, int], bool]) -> OperatorFunction[T, T]:
    """Pass through only values where predicate(value, index) is truthy."""

    def operator(source: Observable[T]) -> Observable[T]:
        def produce(subscriber: Subscriber[T]):
            index = 0

            def on_next(value: T) -> None:
                nonlocal index
                i = index
                index += 1
                if predicate(value, i):
                    subscriber.next(value)

            return source.subscribe(Observer(on_next, subscriber.error, subscriber.complete))

        return Observable(produce, "filter")

    return operator


def debounce_time(delay: float, scheduler: Scheduler | None = None) -> OperatorFunction[T, T]:
    """Emit a value only after `delay` seconds pass without a newer one.

    Trailing-edge: only the last value of a burst survives. A value still
    waiting when the source errors, completes, or is unsubscribed is dropped.
    Timer state belongs to each subscription, never to the operator.
    """
    if delay < 0:
        raise ValueError(f"debounce delay must be non-negative, got {delay!r}")

    def operator(source: Observable[T]) -> Observable[T]:
        def produce(subscriber: Subscriber[T]):
            timer_scheduler = scheduler if scheduler is not None else get_scheduler()
            lock = threading.RLock()
            pending: list[Any] = [None]  # active timer token

            def cancel_pending() -> bool:
                with lock:
                    token, pending[0] = pending[0], None
                if token is None:
                    return False
                timer_scheduler.cancel(token)
                return True

            def on_next(value: T) -> None:
                def fire() -> None:
                    with lock:
                        if pending[0] is not token_ref[0]:
                            return  # superseded
                        pending[0] = None
                    subscriber.next(value)

                token_ref: list[Any] = [None]
                with lock:
                    if pending[0] is not None:
                        timer_scheduler.cancel(pending[0])
                    token_ref[0] = pending[0] = timer_scheduler.schedule_after(delay, fire)

            def on_error(err: Any) -> None:
                if cancel_pending():
                    logger.debug("Pending debounced value dropped on error")
                subscriber.error(err)

            def on_complete() -> None:
                if cancel_pending():
                    logger.debug("Pending debounced value dropped on complete")
                subscriber.complete()

            upstream = source.subscribe(Observer(on_next, on_error, on_complete))
            upstream.add(cancel_pending)
            return upstream

        return Observable(produce, "debounce_time")

    return operator

