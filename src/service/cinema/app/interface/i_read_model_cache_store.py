from abc import ABC, abstractmethod
from typing import Optional

from src.service.cinema.domain.entity.home_aggregate import HomeAggregate


class IReadModelCacheStore(ABC):
    """
    Single-slot persistence for the home aggregate.

    A missing, malformed or unreadable record loads as None, never as an error.
    Saves replace the whole record (last writer wins).
    """

    @abstractmethod
    async def load(self) -> Optional[HomeAggregate]:
        pass

    @abstractmethod
    async def save(self, aggregate: HomeAggregate) -> None:
        pass
