"""
Vendored optional-value types.

``Maybe`` stands in for "a value or nothing" everywhere gencall needs to say
"no result" without overloading ``None``: generators may legitimately yield
or return ``None``, so exhaustion gets its own singleton.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Generic, NoReturn, TypeVar

from frozendict import frozendict

# =========================================================
# Type Vars
# =========================================================
T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
U = TypeVar("U")


class Maybe(Generic[T_co]):
    """Optional value: ``Some`` data, or the ``NOTHING`` singleton."""

    __slots__ = ()

    def is_some(self) -> bool:
        return isinstance(self, Some)

    def unwrap(self) -> T_co:
        """Return the contained value or raise ``RuntimeError``."""

        if isinstance(self, Some):
            return self.value
        raise RuntimeError("Called unwrap on Nothing value")

    def map(self, func: Callable[[T_co], U]) -> Maybe[U]:
        """Apply ``func`` to the contained value when present."""

        if isinstance(self, Some):
            return Some(func(self.value))
        return NOTHING

    def __bool__(self) -> bool:
        return self.is_some()


@dataclass(frozen=True)
class Some(Maybe[T], Generic[T]):
    """Presence of a value."""

    value: T


class Nothing(Maybe[NoReturn]):
    """Singleton representing the absence of a value."""

    __slots__ = ()
    _instance: Nothing | None = None

    def __new__(cls) -> Nothing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Nothing()"


NOTHING: Final[Maybe[NoReturn]] = Nothing()

# =========================================================
# Frozen Dict
# =========================================================
FrozenDict = frozendict

__all__ = [
    "NOTHING",
    "FrozenDict",
    "Maybe",
    "Nothing",
    "Some",
]
