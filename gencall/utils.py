"""
Utility functions for the gencall library.
"""

from __future__ import annotations

import linecache
import os
import sys
from dataclasses import dataclass


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


# Environment variables to control debug and trace output
DEBUG_RESUMABLES = _env_flag("GENCALL_DEBUG")
TRACE_STEPS = _env_flag("GENCALL_TRACE")


_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def _is_gencall_internal(path: str) -> bool:
    return os.path.abspath(path).startswith(_PACKAGE_DIR + os.sep)


@dataclass(frozen=True)
class CreationContext:
    """Where a wrapper was constructed."""

    filename: str
    line: int
    function: str
    code: str | None = None

    def format(self) -> str:
        """Format as 'filename:line in function'."""
        return f"{self.filename}:{self.line} in {self.function}"


def capture_creation_context(skip_frames: int = 2) -> CreationContext | None:
    """
    Capture the first caller frame outside gencall.

    Args:
        skip_frames: Number of frames to skip before searching (default 2 to
            skip this function and its caller)

    Returns:
        CreationContext for the frame, or None when frames are unavailable.
    """
    try:
        frame = sys._getframe(skip_frames)
    except ValueError:
        return None

    while frame.f_back is not None and _is_gencall_internal(frame.f_code.co_filename):
        frame = frame.f_back

    filename = frame.f_code.co_filename
    line = frame.f_lineno
    code = linecache.getline(filename, line).strip() or None
    return CreationContext(
        filename=filename,
        line=line,
        function=frame.f_code.co_name,
        code=code,
    )


__all__ = [
    "DEBUG_RESUMABLES",
    "TRACE_STEPS",
    "CreationContext",
    "capture_creation_context",
]
