"""Function composition used by Observable.pipe()."""

from __future__ import annotations

import functools
from typing import Any, Callable, Sequence


def _identity(value: Any) -> Any:
    return value


def pipe_from_array(fns: Sequence[Callable[[Any], Any]]) -> Callable[[Any], Any]:
    """Compose unary functions left to right.

    No functions gives the identity, a single function is returned as-is,
    otherwise the input is folded through each function in order.
    """
    if not fns:
        return _identity
    if len(fns) == 1:
        return fns[0]
    fns = tuple(fns)

    def piped(value: Any) -> Any:
        return functools.reduce(lambda acc, fn: fn(acc), fns, value)

    return piped
