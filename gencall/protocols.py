"""
Handle protocols for resumable computations.

Two views over the same step protocol:

- ``OnceHandle``: callers that only care about the eventual result poll
  ``resume()`` until it reports ``Completed``. Intermediate payloads are
  erased to ``SUSPENDED``.
- ``YieldHandle``: callers that need the intermediate values use
  ``resume_with_yield()``.

Both return ``NOTHING`` once the computation is exhausted. Anything that
implements ``YieldHandle`` (``Resumable``, ``TracedResumable``, or a user
type) can be fed to the iterators and combinators.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from gencall.state import Resume, ResumeOnce

Y_co = TypeVar("Y_co", covariant=True)
R_co = TypeVar("R_co", covariant=True)


@runtime_checkable
class OnceHandle(Protocol[R_co]):
    """Single-result view: "still running" or "done, here is the value"."""

    def resume(self) -> ResumeOnce[R_co]: ...


@runtime_checkable
class YieldHandle(OnceHandle[R_co], Protocol[Y_co, R_co]):
    """Multi-value view: each step reports the real yielded value."""

    def resume_with_yield(self) -> Resume[Y_co, R_co]: ...


__all__ = ["OnceHandle", "YieldHandle"]
