"""Step results produced by advancing a resumable computation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Generic, TypeAlias, TypeVar

from gencall._vendor import Maybe

Y = TypeVar("Y")
R = TypeVar("R")


@dataclass(frozen=True)
class Suspended(Generic[Y]):
    """The computation yielded ``value`` and can be resumed."""

    value: Y

    def into_yield(self, convert: Callable[[object], Y] | None = None) -> Y:
        return self.value


@dataclass(frozen=True)
class Completed(Generic[R]):
    """The computation returned ``value``. It must never be resumed again."""

    value: R

    def into_yield(self, convert: Callable[[R], Y] | None = None) -> R | Y:
        """Collapse the final value into the yielded-value domain."""
        if convert is None:
            return self.value
        return convert(self.value)


StepResult: TypeAlias = Suspended[Y] | Completed[R]

# Placeholder payload of the single-result view
SUSPENDED: Final[Suspended[None]] = Suspended(None)

Resume: TypeAlias = Maybe[StepResult[Y, R]]
ResumeOnce: TypeAlias = Maybe[StepResult[None, R]]


__all__ = [
    "SUSPENDED",
    "Completed",
    "Resume",
    "ResumeOnce",
    "StepResult",
    "Suspended",
]
