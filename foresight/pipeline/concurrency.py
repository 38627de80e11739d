"""
Ordered, bounded, fail-fast concurrent execution.

Results are written into a slot reserved by input position, so the output
order never depends on completion order. The first failure cancels every
sibling still running and is re-raised.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


async def gather_in_order(
    factories: Sequence[Callable[[], Awaitable[T]]],
    limit: Optional[int] = None,
) -> List[T]:
    """
    Run coroutine factories concurrently, at most ``limit`` at a time.

    Args:
        factories: Zero-argument callables returning awaitables. Factories
            are only invoked once a slot is free, so cancelled work never
            leaves an un-awaited coroutine behind.
        limit: Maximum number in flight; None means no cap

    Returns:
        Results in input order

    Raises:
        The exception of the earliest (by input position) failed task
    """
    if limit is not None and limit < 1:
        raise ValueError("limit must be >= 1")
    if not factories:
        return []

    results: List[Optional[T]] = [None] * len(factories)
    gate = asyncio.Semaphore(limit) if limit is not None else None

    async def run_slot(index: int) -> None:
        if gate is None:
            results[index] = await factories[index]()
            return
        async with gate:
            results[index] = await factories[index]()

    tasks = [asyncio.ensure_future(run_slot(i)) for i in range(len(factories))]

    try:
        _, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    failures = [
        task.exception()
        for task in tasks
        if task.done() and not task.cancelled() and task.exception() is not None
    ]
    if failures:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        raise failures[0]

    return results
