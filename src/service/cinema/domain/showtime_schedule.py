from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from web3 import Web3

from src.service.cinema.domain.entity.showtime_entity import Showtime, ShowtimeGroup, ShowtimeSlot


def format_ether(wei: int) -> str:
    """Ledger wei (18-decimal fixed point) as a plain decimal ether string."""
    value = Web3.from_wei(wei, 'ether')
    return format(Decimal(value), 'f')


def to_local(epoch_seconds: int, tz: ZoneInfo) -> datetime:
    return datetime.fromtimestamp(epoch_seconds, tz=tz)


def format_date(moment: datetime) -> str:
    return f'{moment:%A}, {moment.day} {moment:%B}'


def format_time(moment: datetime) -> str:
    return f'{moment:%H:%M}'


def group_upcoming_showtimes(
    showtimes: Iterable[Showtime],
    *,
    movie_id: int,
    now: float,
    tz: ZoneInfo,
) -> list[ShowtimeGroup]:
    """
    Keep the movie's showtimes that start strictly after `now`, group them by
    calendar date in `tz`, and sort dates and times ascending.
    """
    upcoming = sorted(
        (s for s in showtimes if s.movie_id == movie_id and s.start_time > now),
        key=lambda s: (s.start_time, s.id),
    )

    groups: dict[str, tuple[str, list[ShowtimeSlot]]] = {}
    for showtime in upcoming:
        local_start = to_local(showtime.start_time, tz)
        date_key = local_start.date().isoformat()
        if date_key not in groups:
            groups[date_key] = (format_date(local_start), [])
        groups[date_key][1].append(
            ShowtimeSlot(
                showtime_id=showtime.id,
                start_time=showtime.start_time,
                time_string=format_time(local_start),
                price=format_ether(showtime.ticket_price_wei),
            )
        )

    # Already in start-time order, so insertion order is date order
    return [
        ShowtimeGroup(date=date_key, formatted_date=formatted, times=slots)
        for date_key, (formatted, slots) in groups.items()
    ]
