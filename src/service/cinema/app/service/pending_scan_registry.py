from typing import Set

from src.service.cinema.domain.enum.ticket_status import TicketStatus


class PendingScanRegistry:
    """
    Display-only "pending scan" marks for tickets whose QR code was shown.

    Lives in process memory only. A mark is applied over the ledger status
    while the ledger still says ACTIVE, and is dropped as soon as it says
    anything else.
    """

    def __init__(self) -> None:
        self._pending: Set[int] = set()

    def mark(self, ticket_id: int) -> None:
        self._pending.add(ticket_id)

    def overlay(self, ticket_id: int, chain_status: TicketStatus) -> TicketStatus:
        if ticket_id not in self._pending:
            return chain_status
        if chain_status is TicketStatus.ACTIVE:
            return TicketStatus.PENDING_SCAN
        # The ledger moved on (scanned or refunded): its answer replaces the local mark
        self._pending.discard(ticket_id)
        return chain_status
