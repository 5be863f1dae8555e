import attrs

from src.service.cinema.domain.enum.ticket_status import TicketStatus


@attrs.define(frozen=True)
class Ticket:
    """Ledger ticket record, owned by the purchasing address."""

    id: int
    showtime_id: int
    seat_id: int
    owner: str
    status: TicketStatus = TicketStatus.ACTIVE
