"""Composing and consuming resumable computations.

This example walks through the main operations of gencall:

- Step a wrapped generator by hand and observe exhaustion
- Chain two phases so the second is built from the first's result
- Borrow a computation, consume a prefix, then keep driving it
- Await a computation from asyncio, one step per loop iteration

Run with: uv run python examples/pipelines.py
"""

import asyncio
import logging

from gencall import Resumable, as_future, resumable, traced


@resumable
def countdown(start: int):
    for value in range(start, 0, -1):
        yield value
    return "liftoff"


def readings():
    for value in (3, 1, 4, 1, 5, 9):
        yield value
    return "sensor closed"


def summary(status: str):
    yield f"status: {status}"
    return len(status)


# ============================================================================
# Step 1: Step by hand
# ============================================================================


def step_by_hand() -> None:
    handle = countdown(2)
    while step := handle.resume_with_yield():
        print("step:", step.unwrap())
    print("after completion:", handle.resume_with_yield())


# ============================================================================
# Step 2: Chain two phases
# ============================================================================


def chained() -> None:
    pipeline = Resumable(readings()).chain(summary).unwrap()
    print("chained:", list(pipeline.iter_all(convert=str)))


# ============================================================================
# Step 3: Borrow a prefix, keep the rest
# ============================================================================


def borrowed_prefix() -> None:
    source = Resumable(readings())

    def peak_of_first(handle, count):
        window = list(handle.iter_yielded().take(count))
        yield from window
        return max(window)

    head = source.borrow(lambda handle: peak_of_first(handle, 3)).unwrap()
    print("head:", list(head.iter_all()))
    print("rest:", list(source.iter_all()))


# ============================================================================
# Step 4: Await from asyncio
# ============================================================================


async def awaited() -> None:
    handle = traced(countdown(3))
    print("awaited:", await as_future(handle))
    print("trace:", [record.format() for record in handle.records])


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    step_by_hand()
    chained()
    borrowed_prefix()
    asyncio.run(awaited())
