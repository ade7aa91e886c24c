"""Concurrent store reads that fail together."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import anyio

T = TypeVar("T")


def _first_leaf(group: BaseExceptionGroup) -> BaseException:
    exc: BaseException = group
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc


async def run_all(calls: Sequence[Callable[[], Awaitable[T]]]) -> list[T]:
    """Run each call concurrently and return the results in call order.

    The first failure cancels every read still in flight and is re-raised
    as-is, so callers see the store's own exception rather than a group.
    """
    results: list[T | None] = [None] * len(calls)

    async def run_one(index: int, call: Callable[[], Awaitable[T]]) -> None:
        results[index] = await call()

    try:
        async with anyio.create_task_group() as tg:
            for index, call in enumerate(calls):
                tg.start_soon(run_one, index, call)
    except BaseExceptionGroup as group:
        raise _first_leaf(group)

    return results  # type: ignore[return-value]
