"""
Ticket Status Enum - Domain Value Object

ACTIVE, USED and REFUNDED mirror the ledger's ticket status codes.
PENDING_SCAN never comes from the ledger: it is a display-only overlay set
after a QR code was shown, and is dropped on the next authoritative read.
"""

from enum import StrEnum


class TicketStatus(StrEnum):
    ACTIVE = 'active'
    USED = 'used'
    REFUNDED = 'refunded'
    PENDING_SCAN = 'pending_scan'

    @classmethod
    def from_chain(cls, code: int) -> 'TicketStatus':
        try:
            return _CHAIN_STATUS_CODES[int(code)]
        except (KeyError, ValueError):
            raise ValueError(f'Unknown ticket status code from ledger: {code}') from None


_CHAIN_STATUS_CODES = {
    0: TicketStatus.ACTIVE,
    1: TicketStatus.USED,
    2: TicketStatus.REFUNDED,
}
