"""
Identity Reconciler

Joins ledger movies (id + title) with catalog movies (id + metadata). The
two id spaces share nothing but the title, so:

- ledger -> catalog: first catalog search hit for the ledger title
- catalog -> ledger: case-insensitive exact title match against active
  ledger records

No fuzzy matching. A catalog movie without a ledger match stays
`is_bookable=False`; it is never promoted to bookable.
"""

from typing import Dict, Iterable, List, Optional

from src.platform.concurrency.fan_out import fan_out
from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_catalog_gateway import ICatalogGateway
from src.service.cinema.app.interface.i_ledger_gateway import ILedgerGateway
from src.service.cinema.domain.entity.movie_entity import CatalogMovie, Movie, OnChainMovie


def normalize_title(title: str) -> str:
    return title.casefold()


def index_active_by_title(chain_movies: Iterable[OnChainMovie]) -> Dict[str, OnChainMovie]:
    """Title -> active ledger movie. On duplicate titles the lowest id wins."""
    index: Dict[str, OnChainMovie] = {}
    for movie in sorted(chain_movies, key=lambda m: m.id):
        if movie.is_active:
            index.setdefault(normalize_title(movie.title), movie)
    return index


class IdentityReconciler:
    def __init__(
        self,
        *,
        ledger_gateway: ILedgerGateway,
        catalog_gateway: ICatalogGateway,
        fan_out_limit: int = settings.LEDGER_FAN_OUT_LIMIT,
    ) -> None:
        self.ledger_gateway = ledger_gateway
        self.catalog_gateway = catalog_gateway
        self._fan_out_limit = fan_out_limit
        # Normalized ledger title -> catalog id of its first search hit (None: no hit)
        self._catalog_id_by_title: Dict[str, Optional[int]] = {}

    # ---------------------------------------------------- ledger -> catalog

    async def resolve_catalog(self, title: str) -> Optional[CatalogMovie]:
        key = normalize_title(title)
        if key in self._catalog_id_by_title:
            catalog_id = self._catalog_id_by_title[key]
            if catalog_id is None:
                return None
            return await self.catalog_gateway.fetch_by_id(catalog_id)

        catalog = await self.catalog_gateway.search_by_title(title)
        # Only definitive answers are memoized; a failed fetch after a hit is retried later
        if catalog is not None:
            self._catalog_id_by_title[key] = catalog.catalog_id
        return catalog

    async def enrich_chain_movie(self, chain_movie: OnChainMovie) -> Movie:
        """Bookable merged view of an active ledger movie; metadata-poor without a catalog hit."""
        catalog = await self.resolve_catalog(chain_movie.title)
        if catalog is None:
            Logger.base.info(
                f'🎬 [RECONCILE] No catalog match for ledger movie {chain_movie.id} '
                f'"{chain_movie.title}"'
            )
        return Movie.bookable(chain_movie, catalog)

    async def enrich_chain_movies(self, chain_movies: List[OnChainMovie]) -> List[Movie]:
        active = [movie for movie in chain_movies if movie.is_active]
        return await fan_out(self.enrich_chain_movie, active, limit=self._fan_out_limit)

    # ---------------------------------------------------- catalog -> ledger

    async def find_chain_match(
        self,
        title: str,
        chain_movies: Optional[List[OnChainMovie]] = None,
    ) -> Optional[OnChainMovie]:
        """Scans the ledger when no pre-fetched list is given (O(ledger movie count))."""
        if chain_movies is None:
            chain_movies = await self.ledger_gateway.list_movies()
        return index_active_by_title(chain_movies).get(normalize_title(title))

    async def reconcile_catalog_movie(
        self,
        catalog: CatalogMovie,
        chain_movies: Optional[List[OnChainMovie]] = None,
    ) -> Movie:
        chain_match = await self.find_chain_match(catalog.title, chain_movies)
        if chain_match is None:
            return Movie.catalog_only(catalog)
        return Movie.bookable(chain_match, catalog)

    def reconcile_catalog_movies(
        self,
        catalogs: List[CatalogMovie],
        chain_movies: List[OnChainMovie],
    ) -> List[Movie]:
        """Batch form: one title index for the whole list instead of one scan per movie."""
        index = index_active_by_title(chain_movies)
        merged = []
        for catalog in catalogs:
            chain_match = index.get(normalize_title(catalog.title))
            if chain_match is None:
                merged.append(Movie.catalog_only(catalog))
            else:
                merged.append(Movie.bookable(chain_match, catalog))
        return merged
