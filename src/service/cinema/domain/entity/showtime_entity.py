from typing import Any, List

import attrs


@attrs.define(frozen=True)
class Showtime:
    """Ledger showtime record. `start_time` is epoch seconds, price is in wei."""

    id: int
    movie_id: int
    theater_id: int
    start_time: int
    ticket_price_wei: int
    total_seats: int
    seats_sold: int

    def total_price_wei(self, seat_count: int) -> int:
        return self.ticket_price_wei * seat_count


@attrs.define(frozen=True)
class ShowtimeSlot:
    showtime_id: int
    start_time: int
    time_string: str
    price: str  # ether, decimal string


@attrs.define(frozen=True)
class ShowtimeGroup:
    date: str  # YYYY-MM-DD in the display timezone
    formatted_date: str
    times: List[ShowtimeSlot]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'ShowtimeGroup':
        return cls(
            date=data['date'],
            formatted_date=data['formatted_date'],
            times=[ShowtimeSlot(**slot) for slot in data['times']],
        )
