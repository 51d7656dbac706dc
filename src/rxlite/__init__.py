"""rxlite: minimal push-based reactive streams for Python."""

from importlib.metadata import version as _version

__version__ = _version("rxlite")

from rxlite.subscription import Subscription, Unsubscribable, TeardownLogic
from rxlite.subscriber import Observer, Subscriber
from rxlite.observable import Observable
from rxlite.operators import map, filter, debounce_time
from rxlite.scheduler import (
    Scheduler,
    ThreadingScheduler,
    VirtualTimeScheduler,
    get_scheduler,
    set_scheduler,
)
from rxlite._pipe import pipe_from_array
# textual NOT auto-imported — opt-in only

__all__ = [
    "Observable",
    "Observer",
    "Subscriber",
    "Subscription",
    "Unsubscribable",
    "TeardownLogic",
    "map",
    "filter",
    "debounce_time",
    "pipe_from_array",
    "Scheduler",
    "ThreadingScheduler",
    "VirtualTimeScheduler",
    "get_scheduler",
    "set_scheduler",
]
