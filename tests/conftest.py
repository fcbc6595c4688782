"""Shared generator factories for gencall tests."""

from collections.abc import Callable, Generator
from typing import Any

import pytest


def _numbers_to(limit: int, final: Any) -> Generator[int, Any, Any]:
    for i in range(limit):
        yield i
    return final


@pytest.fixture
def numbers_to() -> Callable[[int, Any], Generator[int, Any, Any]]:
    """Factory for generators yielding ``0..limit-1`` and returning ``final``."""
    return _numbers_to
