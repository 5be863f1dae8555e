import time
from typing import List, Optional
from zoneinfo import ZoneInfo

from src.platform.config.core_setting import settings
from src.service.cinema.app.interface.i_ledger_gateway import ILedgerGateway
from src.service.cinema.domain.entity.showtime_entity import Showtime, ShowtimeGroup
from src.service.cinema.domain.showtime_schedule import group_upcoming_showtimes


class ShowtimeAggregator:
    """Upcoming showtimes of one ledger movie, grouped by display date."""

    def __init__(
        self,
        *,
        ledger_gateway: ILedgerGateway,
        timezone: str = settings.DISPLAY_TIMEZONE,
    ) -> None:
        self.ledger_gateway = ledger_gateway
        self.tz = ZoneInfo(timezone)

    async def list_upcoming_showtimes_for_movie(
        self,
        movie_id: int,
        showtimes: Optional[List[Showtime]] = None,
    ) -> List[ShowtimeGroup]:
        if showtimes is None:
            showtimes = await self.ledger_gateway.list_showtimes()
        return group_upcoming_showtimes(showtimes, movie_id=movie_id, now=time.time(), tz=self.tz)
