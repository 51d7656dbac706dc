"""Textual integration for rxlite. Opt-in — requires textual.

TextualScheduler runs debounce timers on the app's own timer machinery.
subscribe() delivers stream notifications to widgets safely: deliveries are
skipped while the app is paused or not running, marshaled onto the app
thread with call_from_thread, and NoMatches from widget queries is ignored.
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

from rxlite.subscriber import Observer

# Module-owned pause state — keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


class TextualScheduler:
    """Scheduler backed by App.set_timer(). Delays are seconds."""

    def __init__(self, app):
        self._app = app

    def schedule_after(self, delay, callback):
        return self._app.set_timer(delay, callback)

    def cancel(self, token):
        token.stop()


@contextmanager
def pause(app):
    """Suspend guarded deliveries during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def subscribe(app, observable, observer):
    """observable.subscribe() that safely bridges to Textual widgets.

    next values are dropped while the app is not safe to touch. Terminal
    events always go through so the subscriber still stops.
    """
    target = Observer.from_partial(observer)
    _main = threading.get_ident()

    def _dispatch(fn, *args):
        if threading.get_ident() != _main:
            app.call_from_thread(_safe, fn, *args)
        else:
            _safe(fn, *args)

    def _safe(fn, *args):
        try:
            fn(*args)
        except NoMatches:
            pass

    def _next(value):
        if target.next is None or not is_safe(app):
            return
        _dispatch(target.next, value)

    def _error(err):
        if target.error is not None:
            _dispatch(target.error, err)

    def _complete():
        if target.complete is not None:
            _dispatch(target.complete)

    return observable.subscribe(Observer(_next, _error, _complete))
