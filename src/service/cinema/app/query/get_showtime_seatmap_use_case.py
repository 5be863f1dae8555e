from typing import Self
from zoneinfo import ZoneInfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.concurrency.fan_out import fan_out
from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.seatmap import Seatmap
from src.service.cinema.app.interface.i_ledger_gateway import ILedgerGateway
from src.service.cinema.domain import seat_bitmap_codec
from src.service.cinema.domain.showtime_schedule import (
    format_date,
    format_ether,
    format_time,
    to_local,
)


class GetShowtimeSeatmapUseCase:
    """
    Seatmap of one showtime, rebuilt from three ledger reads: the showtime
    record, its movie record and the packed seat bitmap.
    """

    def __init__(
        self,
        *,
        ledger_gateway: ILedgerGateway,
        seats_per_row: int = settings.SEATS_PER_ROW,
        timezone: str = settings.DISPLAY_TIMEZONE,
    ) -> None:
        self.ledger_gateway = ledger_gateway
        self.seats_per_row = seats_per_row
        self.tz = ZoneInfo(timezone)
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        ledger_gateway: ILedgerGateway = Depends(Provide[Container.ledger_gateway]),
    ) -> Self:
        return cls(ledger_gateway=ledger_gateway)

    @Logger.io
    async def get(self, showtime_id: int) -> Seatmap:
        with self.tracer.start_as_current_span(
            'use_case.get_showtime_seatmap', attributes={'showtime.id': showtime_id}
        ):
            showtime = await self.ledger_gateway.showtime_by_id(showtime_id)
            if showtime is None:
                raise NotFoundError(f'Showtime {showtime_id} not found')

            async def _movie():
                return await self.ledger_gateway.movie_by_id(showtime.movie_id)

            async def _bitmap():
                return await self.ledger_gateway.seat_bitmap(showtime_id)

            movie, bitmaps = await fan_out(lambda load: load(), [_movie, _bitmap])

            # Bits past total_seats are ignored; they cannot be sold
            taken = sorted(
                seat
                for seat in seat_bitmap_codec.decode(bitmaps)
                if seat <= showtime.total_seats
            )
            local_start = to_local(showtime.start_time, self.tz)

            return Seatmap(
                showtime_id=showtime.id,
                movie_id=showtime.movie_id,
                movie_title=movie.title if movie is not None else '',
                total_seats=showtime.total_seats,
                seats_per_row=self.seats_per_row,
                ticket_price_wei=showtime.ticket_price_wei,
                ticket_price=format_ether(showtime.ticket_price_wei),
                taken_seats=taken,
                showtime_date=format_date(local_start),
                showtime_time=format_time(local_start),
            )
