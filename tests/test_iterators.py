"""Tests for the iterator views over multi-value handles."""

from itertools import islice

import pytest

from gencall import (
    NOTHING,
    Resumable,
    ReturnIterator,
    YieldIterator,
    iter_all,
    iter_yielded,
)


def test_yield_iterator_drops_final_value(numbers_to):
    handle = Resumable(numbers_to(5, 99))

    assert list(YieldIterator(handle)) == [0, 1, 2, 3, 4]
    assert handle.is_exhausted


def test_return_iterator_appends_final_value(numbers_to):
    handle = Resumable(numbers_to(5, 99))

    assert list(ReturnIterator(handle)) == [0, 1, 2, 3, 4, 99]
    assert handle.is_exhausted


@pytest.mark.parametrize("limit", [0, 1, 5])
def test_order_is_preserved(numbers_to, limit):
    assert list(iter_yielded(Resumable(numbers_to(limit, "f")))) == list(range(limit))
    assert list(iter_all(Resumable(numbers_to(limit, "f")))) == [*range(limit), "f"]


def test_bounded_prefix_leaves_rest_for_fresh_iterator(numbers_to):
    handle = Resumable(numbers_to(5, 99))

    assert list(handle.iter_all().take(4)) == [0, 1, 2, 3]
    assert not handle.is_exhausted

    resumed = handle.iter_all()
    assert next(resumed) == 4
    assert next(resumed) == 99
    with pytest.raises(StopIteration):
        next(resumed)


def test_islice_steps_exactly_k_times(numbers_to):
    handle = Resumable(numbers_to(6, "done"))

    assert list(islice(handle.iter_yielded(), 2)) == [0, 1]
    assert list(islice(handle.iter_yielded(), 2)) == [2, 3]
    assert list(handle.iter_all()) == [4, 5, "done"]


def test_iterators_stay_finished(numbers_to):
    handle = Resumable(numbers_to(1, 1))
    yielded = handle.iter_all()
    assert list(yielded) == [0, 1]

    for _ in range(3):
        with pytest.raises(StopIteration):
            next(yielded)
    assert list(handle.iter_yielded()) == []
    assert handle.resume_with_yield() is NOTHING


def test_yield_iterator_exhausts_wrapper_on_completion(numbers_to):
    handle = Resumable(numbers_to(2, "lost"))

    assert list(handle.iter_yielded()) == [0, 1]
    assert list(handle.iter_all()) == []


def test_convert_maps_final_value(numbers_to):
    handle = Resumable(numbers_to(2, "done"))

    assert list(handle.iter_all(convert=len)) == [0, 1, 4]


def test_wrapper_is_iterable(numbers_to):
    handle = Resumable(numbers_to(3, "ignored"))

    assert [value * 10 for value in handle] == [0, 10, 20]


def test_iterator_repr_names_handle(numbers_to):
    handle = Resumable(numbers_to(1, 1))
    iterator = handle.iter_yielded()

    assert iterator.handle is handle
    assert repr(iterator).startswith("YieldIterator(Resumable(")
