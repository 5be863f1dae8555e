from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Set

from src.platform.exception.exceptions import TransactionInProgress


class InFlightGuard:
    """
    At most one in-flight ledger write per target (showtime or ticket).

    Writes are not idempotent on the ledger, so a second attempt for the same
    target is rejected until the first one resolves to DONE or FAILED.
    """

    def __init__(self) -> None:
        self._targets: Set[str] = set()

    @asynccontextmanager
    async def hold(self, target: str) -> AsyncIterator[None]:
        # Check-and-add has no await in between, so it is atomic on the event loop
        if target in self._targets:
            raise TransactionInProgress(target)
        self._targets.add(target)
        try:
            yield
        finally:
            self._targets.discard(target)
