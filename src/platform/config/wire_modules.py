"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.cinema.app.command import transaction_orchestrator
from src.service.cinema.app.query import (
    get_home_aggregate_use_case,
    get_movie_detail_use_case,
    get_showtime_seatmap_use_case,
    list_my_tickets_use_case,
    search_movies_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    get_home_aggregate_use_case,
    get_movie_detail_use_case,
    get_showtime_seatmap_use_case,
    list_my_tickets_use_case,
    search_movies_use_case,
    transaction_orchestrator,
]
