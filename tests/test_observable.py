"""Tests for Observable — subscribe and pipe."""

from rxlite import Observable, Observer, Subscriber, map


def _of(*values, runs=None):
    """Cold source emitting values synchronously, then completing."""

    def produce(subscriber):
        if runs is not None:
            runs.append(1)
        for v in values:
            subscriber.next(v)
        subscriber.complete()

    return Observable(produce)


def _collect(observable):
    received = []
    observable.subscribe(received.append)
    return received


class TestSubscribe:
    def test_sync_values_delivered_before_return(self):
        received = []
        _of(1, 2, 3).subscribe(received.append)
        assert received == [1, 2, 3]

    def test_returns_subscriber(self):
        sub = _of(1).subscribe(None)
        assert isinstance(sub, Subscriber)
        assert sub.label == "user"

    def test_each_subscription_reruns_producer(self):
        runs = []
        source = _of(1, 2, 3, runs=runs)
        a = _collect(source)
        b = _collect(source)
        assert a == [1, 2, 3]
        assert b == [1, 2, 3]
        assert len(runs) == 2

    def test_producer_teardown_runs_on_unsubscribe(self):
        torn = []

        def produce(subscriber):
            subscriber.next("x")
            return lambda: torn.append("done")

        sub = Observable(produce).subscribe(lambda v: None)
        assert torn == []
        sub.unsubscribe()
        assert torn == ["done"]

    def test_unsubscribable_teardown(self):
        torn = []

        class Resource:
            def unsubscribe(self):
                torn.append("resource")

        sub = Observable(lambda s: Resource()).subscribe(None)
        sub.unsubscribe()
        assert torn == ["resource"]

    def test_teardown_runs_when_producer_completes_synchronously(self):
        torn = []

        def produce(subscriber):
            subscriber.complete()
            return lambda: torn.append("done")

        sub = Observable(produce).subscribe(None)
        assert torn == ["done"]
        assert sub.closed

    def test_producer_error_then_complete_releases_teardown(self):
        torn = []

        def produce(subscriber):
            subscriber.error("x")
            subscriber.complete()
            return lambda: torn.append("released")

        sub = Observable(produce).subscribe(None)
        assert torn == ["released"]
        assert sub.closed

    def test_error_reaches_observer(self):
        errors = []

        def produce(subscriber):
            subscriber.error("boom")

        Observable(produce).subscribe(lambda v: None, error=errors.append)
        assert errors == ["boom"]

    def test_error_without_handler_is_discarded(self):
        Observable(lambda s: s.error("boom")).subscribe(lambda v: None)

    def test_keyword_handlers_with_observer_object(self):
        log = []
        obs = Observer(next=log.append)
        _of(1).subscribe(obs, complete=lambda: log.append("done"))
        assert log == [1, "done"]

    def test_custom_label(self):
        source = Observable(lambda s: None, "ticks")
        assert source.label == "ticks"
        assert source.subscribe(None).label == "ticks"
        assert "ticks" in repr(source)


class TestPipe:
    def test_no_operators_returns_self(self):
        source = _of(1, 2)
        assert source.pipe() is source
        assert _collect(source.pipe()) == [1, 2]

    def test_single_operator_same_as_direct_call(self):
        source = _of(1, 2, 3)
        op = map(lambda v, i: v + 1)
        assert _collect(source.pipe(op)) == _collect(op(source))

    def test_operators_apply_left_to_right(self):
        source = _of(1, 2)
        result = source.pipe(map(lambda v, i: v + 1), map(lambda v, i: v * 10))
        assert _collect(result) == [20, 30]
