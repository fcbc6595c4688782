"""Errors raised by gencall. Exhaustion is never one of them: it is reported as ``NOTHING``."""

from __future__ import annotations

from typing import Any


class GencallError(Exception):
    """Base class for errors raised by gencall itself."""


class NotResumableError(GencallError, TypeError):
    """Raised when something that is not a generator is handed to a wrapper."""

    def __init__(self, obj: Any, *, where: str = "Resumable") -> None:
        self.obj = obj
        super().__init__(
            f"{where} expected a generator, got {type(obj).__name__}: {obj!r}\n"
            "Hint: call the generator function (`gen()`, not `gen`) or use "
            "`Resumable.from_callable(gen)`"
        )


class ExhaustedError(GencallError, RuntimeError):
    """Raised where an exhausted computation cannot be reported as ``NOTHING``."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class AlreadyBorrowedError(GencallError, RuntimeError):
    """Raised when a wrapper is stepped while it is mid-step or lent out."""

    def __init__(self, description: str, state: str) -> None:
        self.state = state
        super().__init__(
            f"Cannot step {description}: it is {state}\n"
            "Hint: a computation may only be driven by one caller at a time"
        )


__all__ = [
    "AlreadyBorrowedError",
    "ExhaustedError",
    "GencallError",
    "NotResumableError",
]
