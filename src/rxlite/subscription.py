"""Subscription — ordered registry of teardown actions.

A Subscription collects cleanup work (plain callables or anything with an
unsubscribe() method) and runs it, in registration order, exactly once.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol, Union, runtime_checkable

logger = logging.getLogger("rxlite.subscription")


@runtime_checkable
class Unsubscribable(Protocol):
    def unsubscribe(self) -> None: ...


TeardownLogic = Union[Unsubscribable, Callable[[], None], None]


class Subscription:
    """Ordered collection of teardowns. unsubscribe() is idempotent."""

    __slots__ = ("_teardowns", "_closed")

    def __init__(self) -> None:
        self._teardowns: list[Unsubscribable | Callable[[], None]] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def add(self, teardown: TeardownLogic) -> None:
        """Register a teardown. None is ignored.

        Adding to an already-closed subscription runs the teardown right away.
        """
        if teardown is None:
            return
        if self._closed:
            _execute(teardown)
            return
        self._teardowns.append(teardown)

    def unsubscribe(self) -> None:
        """Run every teardown in registration order.

        A failing teardown aborts the rest and the exception propagates.
        """
        if self._closed:
            return
        self._closed = True
        teardowns, self._teardowns = self._teardowns, []
        for position, teardown in enumerate(teardowns):
            try:
                _execute(teardown)
            except Exception:
                logger.exception(
                    "Teardown %r failed, %d remaining skipped",
                    teardown, len(teardowns) - position - 1,
                )
                raise

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"{len(self._teardowns)} teardowns"
        return f"Subscription({state})"


def _execute(teardown: Unsubscribable | Callable[[], None]) -> None:
    if callable(teardown):
        teardown()
    else:
        teardown.unsubscribe()
