"""
asyncio boundary for resumable computations.

Each poll from the event loop maps to exactly one step of the handle:

- ``ResumableFuture``: "still suspended" becomes ``PENDING`` (the awaiting
  task yields to the loop with ``asyncio.sleep(0)``), "completed" becomes
  ``Ready(final)``.
- ``ResumableStream``: every step becomes ``Ready(Some(item))``, completion
  or exhaustion becomes ``Ready(NOTHING)`` and ends the ``async for``.

Nothing here schedules work on its own; the handle still runs on whichever
task awaits it, one step per loop iteration.

Usage::

    handle = Resumable(crunch_numbers())
    total = await as_future(handle)

    async for partial in as_stream(Resumable(crunch_numbers())):
        print(partial)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Generator
from dataclasses import dataclass
from typing import Any, Final, Generic, TypeVar

from gencall._vendor import NOTHING, Maybe, Some
from gencall.errors import ExhaustedError
from gencall.protocols import OnceHandle, YieldHandle
from gencall.state import Completed

Y = TypeVar("Y")
R = TypeVar("R")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ready(Generic[R]):
    value: R


class _Pending:
    __slots__ = ()

    def __repr__(self) -> str:
        return "PENDING"


PENDING: Final = _Pending()


class ResumableFuture(Generic[R]):
    """Awaitable resolving to the final value of a single-result handle."""

    __slots__ = ("_handle",)

    def __init__(self, handle: OnceHandle[R]) -> None:
        self._handle = handle

    def poll(self) -> Ready[R] | _Pending:
        """Step the handle once."""
        step = self._handle.resume()
        if not step:
            raise ExhaustedError(f"Cannot await {self._handle!r}: it has already completed")
        result = step.value
        if isinstance(result, Completed):
            return Ready(result.value)
        return PENDING

    async def _drive(self) -> R:
        while True:
            polled = self.poll()
            if isinstance(polled, Ready):
                return polled.value
            await asyncio.sleep(0)

    def __await__(self) -> Generator[Any, None, R]:
        return self._drive().__await__()


class ResumableStream(AsyncIterator[Y], Generic[Y]):
    """Async iterator over the intermediate values of a multi-value handle."""

    __slots__ = ("_handle",)

    def __init__(self, handle: YieldHandle[Y, Any]) -> None:
        self._handle = handle

    def poll_next(self) -> Ready[Maybe[Y]]:
        """Step the handle once; ``Ready(NOTHING)`` marks the end of the stream."""
        step = self._handle.resume_with_yield()
        if not step or isinstance(step.value, Completed):
            return Ready(NOTHING)
        return Ready(Some(step.value.value))

    def __aiter__(self) -> ResumableStream[Y]:
        return self

    async def __anext__(self) -> Y:
        polled = self.poll_next()
        if not polled.value:
            logger.debug("Stream over %r ended", self._handle)
            raise StopAsyncIteration
        # one loop iteration per item
        await asyncio.sleep(0)
        return polled.value.unwrap()


def as_future(handle: OnceHandle[R]) -> ResumableFuture[R]:
    return ResumableFuture(handle)


def as_stream(handle: YieldHandle[Y, Any]) -> ResumableStream[Y]:
    return ResumableStream(handle)


__all__ = [
    "PENDING",
    "Ready",
    "ResumableFuture",
    "ResumableStream",
    "as_future",
    "as_stream",
]
