from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.get_showtime_seatmap_use_case import GetShowtimeSeatmapUseCase
from src.service.cinema.driving_adapter.http_controller.schema.ticket_schema import (
    SeatmapResponse,
)


router = APIRouter()


@router.get('/{showtime_id}/seatmap')
@Logger.io
async def get_seatmap(
    showtime_id: int,
    use_case: GetShowtimeSeatmapUseCase = Depends(GetShowtimeSeatmapUseCase.depends),
) -> SeatmapResponse:
    seatmap = await use_case.get(showtime_id)
    return SeatmapResponse(
        showtime_id=seatmap.showtime_id,
        movie_id=seatmap.movie_id,
        movie_title=seatmap.movie_title,
        total_seats=seatmap.total_seats,
        seats_per_row=seatmap.seats_per_row,
        ticket_price_wei=str(seatmap.ticket_price_wei),
        ticket_price_eth=seatmap.ticket_price,
        taken_seats=seatmap.taken_seats,
        available_count=seatmap.available_count,
        showtime_date=seatmap.showtime_date,
        showtime_time=seatmap.showtime_time,
    )
