"""
Exhaustion-guarded wrapper around a generator.

``Resumable`` owns a generator behind a slot. The slot is cleared in the same
call that observes the generator's final value, so nothing reachable through
the wrapper can touch the generator after it has returned. Every operation
on an exhausted wrapper reports ``NOTHING`` instead of raising.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import TYPE_CHECKING, Any, Generic, ParamSpec, TypeVar

from gencall._vendor import NOTHING, Maybe, Some
from gencall.errors import AlreadyBorrowedError, NotResumableError
from gencall.state import SUSPENDED, Completed, Resume, ResumeOnce, Suspended
from gencall.utils import DEBUG_RESUMABLES, CreationContext, capture_creation_context

if TYPE_CHECKING:
    from gencall.iterators import ReturnIterator, YieldIterator

P = ParamSpec("P")
Y = TypeVar("Y")
R = TypeVar("R")
Y2 = TypeVar("Y2")
R2 = TypeVar("R2")

logger = logging.getLogger(__name__)

_IDLE = "idle"
_STEPPING = "mid-step"
_LENT = "lent out"


def _is_finished(generator: Generator[Any, Any, Any]) -> bool:
    if inspect.isgenerator(generator):
        return inspect.getgeneratorstate(generator) == inspect.GEN_CLOSED
    # Generator ABC implementations expose no state; a raise ends them.
    return True


class _LentGenerator(Generator):
    """Pass-through lent by ``borrowed()`` for non-native generators; notes when one ends."""

    def __init__(self, target: Generator[Any, Any, Any]) -> None:
        self._target = target
        self.finished = False

    def send(self, value: Any) -> Any:
        try:
            return self._target.send(value)
        except BaseException:
            self.finished = True
            raise

    def throw(self, typ: Any, val: Any = None, tb: Any = None) -> Any:
        try:
            if val is None and tb is None:
                return self._target.throw(typ)
            return self._target.throw(typ, val, tb)
        except BaseException:
            self.finished = True
            raise

    def close(self) -> None:
        self.finished = True
        self._target.close()


class Resumable(Generic[Y, R]):
    """
    Safe, single-owner handle to a generator yielding ``Y`` and returning ``R``.

    The wrapper implements both handle views: ``resume()`` for callers that
    only want the final value, ``resume_with_yield()`` for callers that want
    every intermediate value. Iterating it directly yields the intermediate
    values only; use :func:`gencall.combinators.yield_from` inside a generator
    to also capture the final value.

    Example::

        def countdown(n):
            while n:
                yield n
                n -= 1
            return "liftoff"

        handle = Resumable(countdown(2))
        handle.resume_with_yield()  # Some(Suspended(2))
        handle.resume_with_yield()  # Some(Suspended(1))
        handle.resume_with_yield()  # Some(Completed("liftoff"))
        handle.resume_with_yield()  # Nothing()
    """

    __slots__ = ("_generator", "_state", "_created_at")

    def __init__(self, generator: Generator[Y, Any, R]) -> None:
        if not isinstance(generator, Generator):
            raise NotResumableError(generator)
        self._generator: Generator[Y, Any, R] | None = generator
        self._state = _IDLE
        self._created_at: CreationContext | None = (
            capture_creation_context(skip_frames=2) if DEBUG_RESUMABLES else None
        )

    @classmethod
    def from_callable(
        cls,
        func: Callable[P, Generator[Y, Any, R]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Resumable[Y, R]:
        """Call a generator function and wrap the generator it returns."""

        return cls(func(*args, **kwargs))

    # ------------------------------------------------------------------
    # Step protocol
    # ------------------------------------------------------------------

    def resume_with_yield(self) -> Resume[Y, R]:
        """Advance one step, reporting the yielded or returned value."""

        return self._step(None)

    def resume(self) -> ResumeOnce[R]:
        """Advance one step, erasing intermediate values to ``SUSPENDED``."""

        step = self._step(None)
        if step and isinstance(step.value, Suspended):
            return Some(SUSPENDED)
        return step

    def send(self, value: Any) -> Resume[Y, R]:
        """Advance one step, delivering ``value`` as the result of the pending ``yield``."""

        return self._step(value)

    def _step(self, value: Any) -> Resume[Y, R]:
        generator = self._generator
        if generator is None:
            return NOTHING
        self._claim(_STEPPING)
        try:
            yielded = generator.send(value)
        except StopIteration as stop:
            self._generator = None
            logger.debug("Generator completed: %r", self)
            return Some(Completed(stop.value))
        except BaseException:
            if _is_finished(generator):
                self._generator = None
                logger.debug("Generator raised, wrapper exhausted: %r", self)
            raise
        finally:
            self._state = _IDLE
        return Some(Suspended(yielded))

    def _claim(self, state: str) -> None:
        if self._state is not _IDLE:
            raise AlreadyBorrowedError(repr(self), self._state)
        self._state = state

    # ------------------------------------------------------------------
    # Ownership
    # ------------------------------------------------------------------

    @property
    def is_exhausted(self) -> bool:
        return self._generator is None

    @property
    def created_at(self) -> CreationContext | None:
        return self._created_at

    def take(self) -> Maybe[Generator[Y, Any, R]]:
        """Remove and return the generator without driving it."""

        generator = self._generator
        if generator is None:
            return NOTHING
        if self._state is not _IDLE:
            raise AlreadyBorrowedError(repr(self), self._state)
        self._generator = None
        return Some(generator)

    def into_inner(self) -> Maybe[Generator[Y, Any, R]]:
        """Consume the wrapper, handing back the generator if it is still live."""

        return self.take()

    @contextmanager
    def borrowed(self) -> Iterator[Maybe[Generator[Y, Any, R]]]:
        """
        Lend the generator for the body of a ``with`` block.

        The wrapper cannot be stepped until the block exits. If the borrower
        drives the generator to completion, the wrapper is exhausted on exit.
        """
        generator = self._generator
        if generator is None:
            yield NOTHING
            return
        lent = generator if inspect.isgenerator(generator) else _LentGenerator(generator)
        self._claim(_LENT)
        try:
            yield Some(lent)
        finally:
            self._state = _IDLE
            if isinstance(lent, _LentGenerator):
                finished = lent.finished
            else:
                finished = _is_finished(generator)
            if finished:
                self._generator = None
                logger.debug("Borrowed generator finished, wrapper exhausted: %r", self)

    def close(self) -> bool:
        """Drain the wrapper and close the generator. Returns whether one was live."""

        taken = self.take()
        if not taken:
            return False
        taken.unwrap().close()
        return True

    # ------------------------------------------------------------------
    # Composition and consumption
    # ------------------------------------------------------------------

    def chain(
        self, transform: Callable[[R], Generator[Y, Any, R2] | Resumable[Y, R2]]
    ) -> Maybe[Resumable[Y, R2]]:
        from gencall.combinators import chain

        return chain(self, transform)

    compose = chain

    def delegate(
        self, builder: Callable[[Generator[Y, Any, R]], Generator[Y2, Any, R2]]
    ) -> Maybe[Resumable[Y2, R2]]:
        from gencall.combinators import delegate

        return delegate(self, builder)

    def borrow(
        self, builder: Callable[[Resumable[Y, R]], Generator[Y2, Any, R2]]
    ) -> Maybe[Resumable[Y2, R2]]:
        from gencall.combinators import borrow

        return borrow(self, builder)

    def wrap(
        self, builder: Callable[[Resumable[Y, R]], Generator[Y2, Any, R2]]
    ) -> Maybe[Resumable[Y2, R2]]:
        from gencall.combinators import wrap

        return wrap(self, builder)

    def iter_yielded(self) -> YieldIterator[Y]:
        from gencall.iterators import YieldIterator

        return YieldIterator(self)

    def iter_all(self, convert: Callable[[R], Y] | None = None) -> ReturnIterator[Y, R]:
        from gencall.iterators import ReturnIterator

        return ReturnIterator(self, convert)

    def __iter__(self) -> YieldIterator[Y]:
        return self.iter_yielded()

    def __bool__(self) -> bool:
        return self._generator is not None

    def __repr__(self) -> str:
        if self._generator is None:
            target = "exhausted"
        else:
            target = getattr(self._generator, "__qualname__", type(self._generator).__name__)
        parts = [f"Resumable({target}"]
        if self._state is not _IDLE:
            parts.append(f", {self._state}")
        if self._created_at is not None:
            parts.append(f", created at {self._created_at.format()}")
        parts.append(")")
        return "".join(parts)


def resumable(
    func: Callable[P, Generator[Y, Any, R]],
) -> Callable[P, Resumable[Y, R]]:
    """
    Decorator turning a generator function into a ``Resumable`` factory.

    Usage:
        @resumable
        def numbers(limit: int):
            for i in range(limit):
                yield i
            return limit

        handle = numbers(3)  # Resumable, nothing has run yet
    """

    @wraps(func)
    def factory(*args: P.args, **kwargs: P.kwargs) -> Resumable[Y, R]:
        return Resumable(func(*args, **kwargs))

    return factory


__all__ = ["Resumable", "resumable"]
