"""
Iterator views over a multi-value handle.

Both iterators hold nothing but the handle: every ``__next__`` performs
exactly one step, so a caller can stop after any prefix and continue later
with a fresh iterator over the same handle, without losing or repeating an
item. Once the handle reports ``NOTHING`` the iterators stay finished.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from itertools import islice
from typing import Any, Generic, TypeVar

from gencall.protocols import YieldHandle
from gencall.state import Suspended

Y = TypeVar("Y")
R = TypeVar("R")


class _HandleIterator(Iterator[Y], Generic[Y]):
    __slots__ = ("_handle",)

    def __init__(self, handle: YieldHandle[Any, Any]) -> None:
        self._handle = handle

    @property
    def handle(self) -> YieldHandle[Any, Any]:
        return self._handle

    def take(self, n: int) -> Iterator[Y]:
        """Lazily pull at most ``n`` items, stepping the handle at most ``n`` times."""
        return islice(self, n)

    def __iter__(self) -> Iterator[Y]:
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._handle!r})"


class YieldIterator(_HandleIterator[Y]):
    """Yields intermediate values only; the final value is discarded."""

    __slots__ = ()

    def __next__(self) -> Y:
        step = self._handle.resume_with_yield()
        if step and isinstance(step.value, Suspended):
            return step.value.value
        raise StopIteration


class ReturnIterator(_HandleIterator[Y], Generic[Y, R]):
    """
    Yields intermediate values, then one item built from the final value.

    ``convert`` maps the final value into the yielded-value domain and
    defaults to the identity, for computations whose return type already is
    their yield type.
    """

    __slots__ = ("_convert",)

    def __init__(
        self, handle: YieldHandle[Y, R], convert: Callable[[R], Y] | None = None
    ) -> None:
        super().__init__(handle)
        self._convert = convert

    def __next__(self) -> Y:
        step = self._handle.resume_with_yield()
        if not step:
            raise StopIteration
        return step.value.into_yield(self._convert)


def iter_yielded(handle: YieldHandle[Y, Any]) -> YieldIterator[Y]:
    return YieldIterator(handle)


def iter_all(
    handle: YieldHandle[Y, R], convert: Callable[[R], Y] | None = None
) -> ReturnIterator[Y, R]:
    return ReturnIterator(handle, convert)


__all__ = ["ReturnIterator", "YieldIterator", "iter_all", "iter_yielded"]
