"""
Catalog Gateway Interface

Plain request/response over the external movie catalog. Failures never raise:
lookups return None and lists return [] so reconciliation degrades gracefully.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.cinema.domain.entity.movie_entity import CatalogMovie, Genre


class ICatalogGateway(ABC):
    @abstractmethod
    async def search_by_title(self, title: str) -> Optional[CatalogMovie]:
        """
        Detailed record of the first search hit only.

        Ambiguous titles resolve to whatever the catalog ranks first.
        """
        pass

    @abstractmethod
    async def search(self, query: str) -> List[CatalogMovie]:
        """All search hits, summary fields only"""
        pass

    @abstractmethod
    async def fetch_by_id(self, catalog_id: int) -> Optional[CatalogMovie]:
        """Detailed record with cast and trailers; memoized for the process lifetime"""
        pass

    @abstractmethod
    async def list_popular(self) -> List[CatalogMovie]:
        pass

    @abstractmethod
    async def list_upcoming(self) -> List[CatalogMovie]:
        pass

    @abstractmethod
    async def list_genres(self) -> List[Genre]:
        pass
