"""Cinema Domain Enums"""

from src.service.cinema.domain.enum.ticket_status import TicketStatus
from src.service.cinema.domain.enum.transaction_state import (
    ConfirmationPolicy,
    TransactionKind,
    TransactionState,
)

__all__ = ['ConfirmationPolicy', 'TicketStatus', 'TransactionKind', 'TransactionState']
