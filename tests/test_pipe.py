"""Tests for pipe_from_array composition."""

from rxlite import pipe_from_array


def test_empty_is_identity():
    fn = pipe_from_array([])
    marker = object()
    assert fn(marker) is marker


def test_single_function_returned_by_reference():
    def inc(x):
        return x + 1

    assert pipe_from_array([inc]) is inc


def test_many_fold_left_to_right():
    fn = pipe_from_array([lambda x: x + 1, lambda x: x * 10, str])
    assert fn(2) == "30"


def test_generic_over_types():
    fn = pipe_from_array([str.upper, lambda s: s + "!"])
    assert fn("hi") == "HI!"
