"""Ticket ownership read model DTOs."""

from typing import Optional

import attrs

from src.service.cinema.domain.enum.ticket_status import TicketStatus


@attrs.define(frozen=True)
class TicketView:
    ticket_id: int
    showtime_id: int
    seat_id: int
    seat: str  # label, e.g. "B3"
    owner: str
    status: TicketStatus
    movie_title: str
    poster_url: Optional[str]
    start_time: int
    date: str
    time: str
    is_upcoming: bool


@attrs.define(frozen=True)
class QrPayload:
    """Redemption payload rendered as a QR code; scanning is done elsewhere."""

    ticket_id: int
    seat: str
    owner: str

    def to_dict(self) -> dict[str, object]:
        return {'ticketId': self.ticket_id, 'seat': self.seat, 'owner': self.owner}
