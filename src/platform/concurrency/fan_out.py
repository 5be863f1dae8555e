"""
Order-preserving concurrent fan-out on top of anyio task groups.

The ledger exposes no batch reads, so enumerations issue one request per id.
Requests run concurrently (bounded by a CapacityLimiter) and every result is
written into the slot of its input index, so the output order always matches
the input order regardless of completion order.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import anyio


_T = TypeVar('_T')
_R = TypeVar('_R')


async def fan_out(
    func: Callable[[_T], Awaitable[_R]],
    items: Sequence[_T],
    *,
    limit: int = 16,
) -> list[_R]:
    """
    Run `func` over `items` concurrently and return results in input order.

    The first exception raised by any call cancels the remaining calls and
    propagates; callers that tolerate per-item failure handle it inside `func`.
    """
    if not items:
        return []

    limiter = anyio.CapacityLimiter(max(1, limit))
    results: list[_R | None] = [None] * len(items)
    errors: list[Exception] = []

    async with anyio.create_task_group() as tg:

        async def _run(index: int, item: _T) -> None:
            async with limiter:
                try:
                    results[index] = await func(item)
                except Exception as e:
                    # Re-raised bare below instead of as an ExceptionGroup
                    errors.append(e)
                    tg.cancel_scope.cancel()

        for index, item in enumerate(items):
            tg.start_soon(_run, index, item)

    if errors:
        raise errors[0]
    return results  # type: ignore[return-value]
