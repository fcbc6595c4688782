"""
Composition of resumable computations.

``chain`` sequences two computations end to end; ``delegate``, ``borrow``
and ``wrap`` build a new computation that drives an existing one, differing
only in who owns the original afterwards:

- ``delegate``: the raw generator moves into the builder.
- ``borrow``: the builder gets the wrapper itself and the caller keeps it.
- ``wrap``: the builder gets a fresh wrapper; the original is emptied.

All of them report an exhausted input with ``NOTHING`` and none of them
advance anything until the returned wrapper is stepped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from typing import Any, TypeVar, Union

from gencall._vendor import NOTHING, Maybe, Some
from gencall.errors import ExhaustedError, NotResumableError
from gencall.protocols import YieldHandle
from gencall.resumable import Resumable
from gencall.state import Completed

Y = TypeVar("Y")
R = TypeVar("R")
Y2 = TypeVar("Y2")
R2 = TypeVar("R2")

logger = logging.getLogger(__name__)

ProgramLike = Union[Generator[Y, Any, R], Resumable[Y, R]]


def yield_from(handle: YieldHandle[Y, R]) -> Generator[Y, Any, Maybe[R]]:
    """
    Re-yield every intermediate value of ``handle`` and return its final value.

    Returns ``Some(final)`` when the handle completes, or ``NOTHING`` if it
    was already exhausted when first stepped. Values sent into this
    generator are not forwarded; the handle is stepped with plain resumes.

    Usage:
        def pipeline(source: Resumable[int, str]):
            final = yield from yield_from(source)
            return final.map(len)
    """
    while True:
        step = handle.resume_with_yield()
        if not step:
            return NOTHING
        result = step.value
        if isinstance(result, Completed):
            return Some(result.value)
        yield result.value


def _as_generator(value: Any, where: str) -> Generator[Any, Any, Any]:
    if isinstance(value, Resumable):
        taken = value.take()
        if not taken:
            raise ExhaustedError(f"{where} returned an exhausted Resumable")
        return taken.unwrap()
    if isinstance(value, Generator):
        return value
    raise NotResumableError(value, where=where)


def _chained(
    first: Generator[Y, Any, R],
    transform: Callable[[R], ProgramLike[Y, R2]],
) -> Generator[Y, Any, R2]:
    ret = yield from first
    logger.debug("Chain first phase returned %r, building second phase", ret)
    second = _as_generator(transform(ret), "chain transform")
    return (yield from second)


def chain(
    handle: Resumable[Y, R],
    transform: Callable[[R], ProgramLike[Y, R2]],
) -> Maybe[Resumable[Y, R2]]:
    """
    Sequence ``handle`` with the computation ``transform`` builds from its result.

    The returned wrapper yields everything ``handle`` yields, then calls
    ``transform`` once with the final value and yields everything the new
    computation yields. Its final value is the new computation's final value.
    ``handle`` is emptied; ``NOTHING`` is returned if it already was.
    """
    if not callable(transform):
        raise TypeError("transform must be callable returning a generator")

    return handle.take().map(lambda first: Resumable(_chained(first, transform)))


compose = chain


def delegate(
    handle: Resumable[Y, R],
    builder: Callable[[Generator[Y, Any, R]], ProgramLike[Y2, R2]],
) -> Maybe[Resumable[Y2, R2]]:
    """Move the generator out of ``handle`` into a computation built by ``builder``."""
    if not callable(builder):
        raise TypeError("builder must be callable returning a generator")

    return handle.take().map(
        lambda generator: Resumable(_as_generator(builder(generator), "delegate builder"))
    )


def borrow(
    handle: Resumable[Y, R],
    builder: Callable[[Resumable[Y, R]], ProgramLike[Y2, R2]],
) -> Maybe[Resumable[Y2, R2]]:
    """
    Build a computation that steps ``handle`` through its safe interface.

    The caller keeps ``handle``: once the borrowing computation is done with
    it, stepping ``handle`` continues exactly where the borrower stopped.
    """
    if not callable(builder):
        raise TypeError("builder must be callable returning a generator")
    if handle.is_exhausted:
        return NOTHING

    return Some(Resumable(_as_generator(builder(handle), "borrow builder")))


def wrap(
    handle: Resumable[Y, R],
    builder: Callable[[Resumable[Y, R]], ProgramLike[Y2, R2]],
) -> Maybe[Resumable[Y2, R2]]:
    """Move the whole computation, as a fresh wrapper, into ``builder``."""
    if not callable(builder):
        raise TypeError("builder must be callable returning a generator")

    return handle.take().map(
        lambda generator: Resumable(_as_generator(builder(Resumable(generator)), "wrap builder"))
    )


__all__ = [
    "borrow",
    "chain",
    "compose",
    "delegate",
    "wrap",
    "yield_from",
]
