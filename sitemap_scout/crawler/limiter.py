# sitemap_scout/crawler/limiter.py
"""
Bounded-parallelism executor: a fixed pool of workers pulling items from a
queue in input order.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Sequence, TypeVar

T = TypeVar("T")


async def run_bounded(
    items: Sequence[T],
    limit: int,
    task: Callable[[T], Awaitable[None]],
) -> None:
    """
    Run ``task(item)`` for every item with at most *limit* tasks in flight.

    Items start in input order as soon as a slot frees; completion order is
    unspecified. Returns once every task has finished. Task bodies are
    expected to handle their own failures: if one raises anyway, the
    remaining items still run and the first exception is re-raised at the end.
    """
    limit = max(1, int(limit))
    queue: asyncio.Queue[T] = asyncio.Queue()
    for item in items:
        queue.put_nowait(item)

    errors: List[BaseException] = []

    async def _worker() -> None:
        while True:
            try:
                item = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            try:
                await task(item)
            except Exception as exc:
                errors.append(exc)
            finally:
                queue.task_done()

    workers = [asyncio.create_task(_worker()) for _ in range(min(limit, len(items)))]
    await asyncio.gather(*workers)

    if errors:
        raise errors[0]
