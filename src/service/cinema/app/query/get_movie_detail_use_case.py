from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.concurrency.fan_out import fan_out
from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_catalog_gateway import ICatalogGateway
from src.service.cinema.app.interface.i_ledger_gateway import ILedgerGateway
from src.service.cinema.app.service.identity_reconciler import IdentityReconciler
from src.service.cinema.app.service.showtime_aggregator import ShowtimeAggregator
from src.service.cinema.domain.entity.movie_entity import CatalogMovie, Movie, OnChainMovie
from src.service.cinema.domain.entity.showtime_entity import Showtime


class GetMovieDetailUseCase:
    def __init__(
        self,
        *,
        ledger_gateway: ILedgerGateway,
        catalog_gateway: ICatalogGateway,
        identity_reconciler: IdentityReconciler,
        showtime_aggregator: ShowtimeAggregator,
    ) -> None:
        self.ledger_gateway = ledger_gateway
        self.catalog_gateway = catalog_gateway
        self.identity_reconciler = identity_reconciler
        self.showtime_aggregator = showtime_aggregator
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        ledger_gateway: ILedgerGateway = Depends(Provide[Container.ledger_gateway]),
        catalog_gateway: ICatalogGateway = Depends(Provide[Container.catalog_gateway]),
        identity_reconciler: IdentityReconciler = Depends(
            Provide[Container.identity_reconciler]
        ),
        showtime_aggregator: ShowtimeAggregator = Depends(
            Provide[Container.showtime_aggregator]
        ),
    ) -> Self:
        return cls(
            ledger_gateway=ledger_gateway,
            catalog_gateway=catalog_gateway,
            identity_reconciler=identity_reconciler,
            showtime_aggregator=showtime_aggregator,
        )

    @Logger.io
    async def get_by_ledger_id(self, movie_id: int) -> Movie:
        """Detail of a ledger movie; showtimes are attached only while it is active"""
        with self.tracer.start_as_current_span(
            'use_case.get_movie_detail', attributes={'movie.id': movie_id}
        ):
            chain_movie = await self.ledger_gateway.movie_by_id(movie_id)
            if chain_movie is None:
                raise NotFoundError(f'Movie {movie_id} not found')

            if not chain_movie.is_active:
                catalog = await self.identity_reconciler.resolve_catalog(chain_movie.title)
                if catalog is None:
                    raise NotFoundError(f'Movie {movie_id} is not available')
                Logger.base.info(f'🎬 [DETAIL] Ledger movie {movie_id} inactive, catalog only')
                return Movie.catalog_only(catalog)

            return await self._bookable_detail(chain_movie)

    @Logger.io
    async def get_by_catalog_id(self, catalog_id: int) -> Movie:
        """Detail of a catalog movie, promoted to bookable only on a ledger title match"""
        with self.tracer.start_as_current_span(
            'use_case.get_catalog_movie_detail', attributes={'catalog.id': catalog_id}
        ):
            catalog = await self.catalog_gateway.fetch_by_id(catalog_id)
            if catalog is None:
                raise NotFoundError(f'Catalog movie {catalog_id} not found')

            chain_match = await self.identity_reconciler.find_chain_match(catalog.title)
            if chain_match is None:
                return Movie.catalog_only(catalog)

            Logger.base.info(
                f'🔗 [DETAIL] Catalog {catalog_id} matched ledger movie {chain_match.id}'
            )
            return await self._bookable_detail(chain_match, catalog=catalog)

    async def _bookable_detail(
        self, chain_movie: OnChainMovie, *, catalog: Optional[CatalogMovie] = None
    ) -> Movie:
        async def _catalog() -> Optional[CatalogMovie]:
            if catalog is not None:
                return catalog
            return await self.identity_reconciler.resolve_catalog(chain_movie.title)

        async def _showtimes() -> List[Showtime]:
            return await self.ledger_gateway.list_showtimes()

        catalog_result, showtimes = await fan_out(lambda load: load(), [_catalog, _showtimes])
        grouped = await self.showtime_aggregator.list_upcoming_showtimes_for_movie(
            chain_movie.id, showtimes
        )
        return Movie.bookable(chain_movie, catalog_result, grouped_showtimes=grouped)
