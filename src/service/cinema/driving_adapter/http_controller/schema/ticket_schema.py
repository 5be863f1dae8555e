from typing import List, Optional

from src.service.cinema.domain.enum.ticket_status import TicketStatus
from src.service.cinema.driving_adapter.http_controller.schema.movie_schema import CamelModel


class SeatmapResponse(CamelModel):
    showtime_id: int
    movie_id: int
    movie_title: str
    total_seats: int
    seats_per_row: int
    ticket_price_wei: str  # uint256 does not fit a JSON number
    ticket_price_eth: str
    taken_seats: List[int]
    available_count: int
    showtime_date: str
    showtime_time: str


class TicketResponse(CamelModel):
    ticket_id: int
    showtime_id: int
    seat_id: int
    seat: str
    owner: str
    status: TicketStatus
    movie_title: str
    poster_url: Optional[str] = None
    start_time: int
    date: str
    time: str
    is_upcoming: bool


class QrPayloadResponse(CamelModel):
    ticket_id: int
    seat: str
    owner: str
