"""Tests for the exhaustion-guarded Resumable wrapper."""

import importlib
from collections.abc import Generator

import pytest

from gencall import (
    NOTHING,
    SUSPENDED,
    AlreadyBorrowedError,
    Completed,
    NotResumableError,
    Resumable,
    Some,
    Suspended,
    resumable,
)

# the package attribute `gencall.resumable` is the decorator, not the module
resumable_module = importlib.import_module("gencall.resumable")


def test_step_reports_yields_then_completion(numbers_to):
    handle = Resumable(numbers_to(2, "done"))

    assert handle.resume_with_yield() == Some(Suspended(0))
    assert handle.resume_with_yield() == Some(Suspended(1))
    assert not handle.is_exhausted
    assert handle.resume_with_yield() == Some(Completed("done"))
    assert handle.is_exhausted


def test_exhaustion_is_permanent(numbers_to):
    handle = Resumable(numbers_to(1, None))
    handle.resume_with_yield()
    assert handle.resume_with_yield() == Some(Completed(None))

    for _ in range(3):
        assert handle.resume_with_yield() is NOTHING
        assert handle.resume() is NOTHING
        assert handle.send(1) is NOTHING
    assert not handle


def test_resume_erases_yielded_values(numbers_to):
    handle = Resumable(numbers_to(2, 42))

    first = handle.resume()
    assert first == Some(SUSPENDED)
    assert first.unwrap().value is None
    assert handle.resume() == Some(SUSPENDED)
    assert handle.resume() == Some(Completed(42))
    assert handle.resume() is NOTHING


def test_yielding_none_is_not_exhaustion():
    def nones():
        yield None
        return None

    handle = Resumable(nones())
    assert handle.resume_with_yield() == Some(Suspended(None))
    assert handle.resume_with_yield() == Some(Completed(None))
    assert handle.resume_with_yield() is NOTHING


def accumulator():
    total = 0
    while True:
        value = yield total
        if value is None:
            return total
        total += value


def test_send_delivers_values_into_the_generator():
    handle = Resumable(accumulator())

    assert handle.resume_with_yield() == Some(Suspended(0))
    assert handle.send(5) == Some(Suspended(5))
    assert handle.send(2) == Some(Suspended(7))
    assert handle.send(None) == Some(Completed(7))
    assert handle.is_exhausted


def test_send_into_unstarted_generator_keeps_wrapper_live():
    handle = Resumable(accumulator())

    with pytest.raises(TypeError):
        handle.send(1)

    assert not handle.is_exhausted
    assert handle.resume_with_yield() == Some(Suspended(0))


def test_exception_from_generator_propagates_and_exhausts():
    def boom():
        yield 1
        raise ValueError("boom")

    handle = Resumable(boom())
    handle.resume_with_yield()

    with pytest.raises(ValueError, match="boom"):
        handle.resume_with_yield()

    assert handle.is_exhausted
    assert handle.resume_with_yield() is NOTHING


def test_rejects_non_generators():
    with pytest.raises(NotResumableError, match="expected a generator"):
        Resumable([1, 2, 3])  # type: ignore[arg-type]

    def gen():
        yield 1

    with pytest.raises(TypeError):
        Resumable(gen)  # type: ignore[arg-type]


def test_take_is_idempotent(numbers_to):
    handle = Resumable(numbers_to(3, 3))

    taken = handle.take()
    assert taken
    assert next(taken.unwrap()) == 0
    assert handle.take() is NOTHING
    assert handle.resume_with_yield() is NOTHING


def test_into_inner_hands_back_live_generator(numbers_to):
    handle = Resumable(numbers_to(1, "r"))
    handle.resume_with_yield()

    inner = handle.into_inner()
    assert inner.is_some()
    assert handle.is_exhausted

    exhausted = Resumable(numbers_to(0, "r"))
    exhausted.resume_with_yield()
    assert exhausted.into_inner() is NOTHING


def test_borrowed_generator_continues_in_wrapper(numbers_to):
    handle = Resumable(numbers_to(3, "end"))

    with handle.borrowed() as lent:
        generator = lent.unwrap()
        assert next(generator) == 0
        with pytest.raises(AlreadyBorrowedError, match="lent out"):
            handle.resume_with_yield()

    assert handle.resume_with_yield() == Some(Suspended(1))


def test_borrowed_generator_driven_to_completion_exhausts(numbers_to):
    handle = Resumable(numbers_to(3, "end"))

    with handle.borrowed() as lent:
        assert list(lent.unwrap()) == [0, 1, 2]

    assert handle.is_exhausted
    with handle.borrowed() as lent:
        assert lent is NOTHING


class Countdown(Generator):
    """Hand-written ``Generator`` counting down to zero, then returning ``"done"``."""

    def __init__(self, n):
        self.n = n

    def send(self, value):
        if self.n == 0:
            raise StopIteration("done")
        self.n -= 1
        return self.n + 1

    def throw(self, typ, val=None, tb=None):
        raise typ if val is None else val


def test_borrowed_class_generator_driven_to_completion_exhausts():
    handle = Resumable(Countdown(3))

    with handle.borrowed() as lent:
        assert list(lent.unwrap()) == [3, 2, 1]

    assert handle.is_exhausted
    assert handle.resume_with_yield() is NOTHING


def test_borrowed_class_generator_partially_driven_stays_live():
    handle = Resumable(Countdown(3))

    with handle.borrowed() as lent:
        assert next(lent.unwrap()) == 3

    assert not handle.is_exhausted
    assert handle.resume_with_yield() == Some(Suspended(2))
    assert handle.resume_with_yield() == Some(Suspended(1))
    assert handle.resume_with_yield() == Some(Completed("done"))
    assert handle.resume_with_yield() is NOTHING


def test_generator_stepping_its_own_wrapper_is_rejected():
    holder = {}

    def selfish():
        yield holder["handle"].resume_with_yield()

    handle = Resumable(selfish())
    holder["handle"] = handle

    with pytest.raises(AlreadyBorrowedError, match="mid-step"):
        handle.resume_with_yield()
    assert handle.is_exhausted


def test_close_runs_finally_blocks():
    cleaned = []

    def guarded():
        try:
            yield 1
            yield 2
        finally:
            cleaned.append(True)

    handle = Resumable(guarded())
    handle.resume_with_yield()

    assert handle.close() is True
    assert cleaned == [True]
    assert handle.close() is False
    assert handle.resume_with_yield() is NOTHING


def test_resumable_decorator_is_lazy():
    started = []

    @resumable
    def work(n):
        started.append(n)
        yield n
        return n * 2

    handle = work(4)
    assert isinstance(handle, Resumable)
    assert started == []
    assert work.__name__ == "work"

    assert list(handle.iter_all()) == [4, 8]
    assert started == [4]


def test_from_callable_passes_arguments(numbers_to):
    handle = Resumable.from_callable(numbers_to, 2, final="x")

    assert list(handle.iter_all()) == [0, 1, "x"]


def test_repr_reflects_state(numbers_to):
    handle = Resumable(numbers_to(1, 1))
    assert repr(handle).startswith("Resumable(_numbers_to")

    handle.close()
    assert repr(handle) == "Resumable(exhausted)"


def test_debug_mode_captures_creation_site(monkeypatch, numbers_to):
    monkeypatch.setattr(resumable_module, "DEBUG_RESUMABLES", True)

    handle = Resumable(numbers_to(1, 1))

    assert handle.created_at is not None
    assert handle.created_at.filename == __file__
    assert handle.created_at.function == "test_debug_mode_captures_creation_site"
    assert "created at" in repr(handle)


def test_creation_site_not_captured_by_default(monkeypatch, numbers_to):
    monkeypatch.setattr(resumable_module, "DEBUG_RESUMABLES", False)

    assert Resumable(numbers_to(1, 1)).created_at is None
