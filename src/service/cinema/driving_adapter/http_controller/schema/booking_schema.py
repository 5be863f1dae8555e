from typing import List, Optional

from pydantic import ConfigDict, Field

from src.service.cinema.driving_adapter.http_controller.schema.movie_schema import CamelModel


class BookingCreateRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={'example': {'showtimeId': 3, 'seatIds': [11, 12]}}
    )

    showtime_id: int = Field(gt=0)
    seat_ids: List[int] = Field(min_length=1)


class TransactionResponse(CamelModel):
    kind: str
    target: str
    state: str
    tx_hash: Optional[str] = None
    value_wei: str = '0'
