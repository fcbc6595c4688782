"""
gencall - Safe stepping and composition of Python generators.

Wraps a generator so it can be driven one step at a time without ever being
resumed after it has returned, composes wrapped generators end to end, and
exposes them as plain iterators or asyncio awaitables.

Example:
    >>> from gencall import Resumable
    >>>
    >>> def numbers():
    ...     yield from range(5)
    ...     return 99
    >>>
    >>> handle = Resumable(numbers())
    >>> list(handle.iter_all().take(4))
    [0, 1, 2, 3]
    >>> list(handle.iter_all())
    [4, 99]
"""

from gencall._vendor import NOTHING, FrozenDict, Maybe, Nothing, Some
from gencall.asyncio_bridge import (
    PENDING,
    Ready,
    ResumableFuture,
    ResumableStream,
    as_future,
    as_stream,
)
from gencall.combinators import borrow, chain, compose, delegate, wrap, yield_from
from gencall.errors import (
    AlreadyBorrowedError,
    ExhaustedError,
    GencallError,
    NotResumableError,
)
from gencall.iterators import ReturnIterator, YieldIterator, iter_all, iter_yielded
from gencall.protocols import OnceHandle, YieldHandle
from gencall.resumable import Resumable, resumable
from gencall.state import (
    SUSPENDED,
    Completed,
    Resume,
    ResumeOnce,
    StepResult,
    Suspended,
)
from gencall.trace import StepRecord, TracedResumable, traced

__version__ = "0.1.0"

__all__ = [
    # Optional values
    "Maybe",
    "Some",
    "Nothing",
    "NOTHING",
    "FrozenDict",
    # Step results
    "StepResult",
    "Suspended",
    "Completed",
    "SUSPENDED",
    "Resume",
    "ResumeOnce",
    # Handles
    "OnceHandle",
    "YieldHandle",
    "Resumable",
    "resumable",
    # Combinators
    "chain",
    "compose",
    "delegate",
    "borrow",
    "wrap",
    "yield_from",
    # Iterators
    "YieldIterator",
    "ReturnIterator",
    "iter_yielded",
    "iter_all",
    # asyncio boundary
    "ResumableFuture",
    "ResumableStream",
    "Ready",
    "PENDING",
    "as_future",
    "as_stream",
    # Tracing
    "StepRecord",
    "TracedResumable",
    "traced",
    # Errors
    "GencallError",
    "NotResumableError",
    "ExhaustedError",
    "AlreadyBorrowedError",
]
