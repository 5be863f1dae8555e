"""Seatmap read model DTO."""

from typing import List

import attrs


@attrs.define(frozen=True)
class Seatmap:
    showtime_id: int
    movie_id: int
    movie_title: str
    total_seats: int
    seats_per_row: int
    ticket_price_wei: int
    ticket_price: str  # ether, decimal string
    taken_seats: List[int]  # ascending
    showtime_date: str
    showtime_time: str

    @property
    def available_count(self) -> int:
        return self.total_seats - len(self.taken_seats)

    def is_available(self, seat_number: int) -> bool:
        return 1 <= seat_number <= self.total_seats and seat_number not in self.taken_seats
