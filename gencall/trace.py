"""
Step tracing for resumable computations.

``traced(handle)`` returns a ``TracedResumable`` that forwards every step to
``handle`` and keeps one ``StepRecord`` per step. When ``GENCALL_TRACE`` is
set, each record is also reported through loguru.

Example::

    handle = traced(Resumable(numbers(3)))
    list(handle.iter_all())
    handle.records     # (StepRecord(0, "yielded", "0"), ..., StepRecord(3, "returned", "3"))
    handle.counts()    # frozendict({"yielded": 3, "returned": 1})
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, Literal, TypeAlias, TypeVar

from loguru import logger

from gencall._vendor import FrozenDict, Some
from gencall.protocols import YieldHandle
from gencall.state import SUSPENDED, Completed, Resume, ResumeOnce, Suspended
from gencall.utils import TRACE_STEPS

if TYPE_CHECKING:
    from gencall.iterators import ReturnIterator, YieldIterator

Y = TypeVar("Y")
R = TypeVar("R")

StepKind: TypeAlias = Literal["yielded", "returned", "exhausted"]

trace_logger = logger.bind(component="gencall.trace")


@dataclass(frozen=True)
class StepRecord:
    index: int
    kind: StepKind
    value_repr: str | None

    def format(self) -> str:
        if self.value_repr is None:
            return f"#{self.index} {self.kind}"
        return f"#{self.index} {self.kind} {self.value_repr}"


class TracedResumable(Generic[Y, R]):
    """Multi-value handle that records every step taken through it."""

    def __init__(self, handle: YieldHandle[Y, R], *, log: bool | None = None) -> None:
        self._handle = handle
        self._records: list[StepRecord] = []
        self._log = TRACE_STEPS if log is None else log

    @property
    def handle(self) -> YieldHandle[Y, R]:
        return self._handle

    @property
    def records(self) -> tuple[StepRecord, ...]:
        return tuple(self._records)

    def counts(self) -> FrozenDict:
        return FrozenDict(Counter(record.kind for record in self._records))

    def resume_with_yield(self) -> Resume[Y, R]:
        step = self._handle.resume_with_yield()
        self._record(step)
        return step

    def resume(self) -> ResumeOnce[R]:
        step = self.resume_with_yield()
        if step and isinstance(step.value, Suspended):
            return Some(SUSPENDED)
        return step

    def _record(self, step: Resume[Y, R]) -> None:
        kind: StepKind
        value_repr: str | None
        if not step:
            kind, value_repr = "exhausted", None
        elif isinstance(step.value, Completed):
            kind, value_repr = "returned", repr(step.value.value)
        else:
            kind, value_repr = "yielded", repr(step.value.value)
        record = StepRecord(index=len(self._records), kind=kind, value_repr=value_repr)
        self._records.append(record)
        if self._log:
            trace_logger.debug("{handle}: {step}", handle=self._handle, step=record.format())

    def iter_yielded(self) -> YieldIterator[Y]:
        from gencall.iterators import YieldIterator

        return YieldIterator(self)

    def iter_all(self, convert: Callable[[R], Y] | None = None) -> ReturnIterator[Y, R]:
        from gencall.iterators import ReturnIterator

        return ReturnIterator(self, convert)

    def __repr__(self) -> str:
        return f"TracedResumable({self._handle!r}, steps={len(self._records)})"


def traced(handle: YieldHandle[Y, R], *, log: bool | None = None) -> TracedResumable[Y, R]:
    return TracedResumable(handle, log=log)


__all__ = ["StepKind", "StepRecord", "TracedResumable", "traced"]
