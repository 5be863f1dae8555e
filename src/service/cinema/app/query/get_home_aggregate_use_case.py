import time
from typing import Any, Awaitable, Callable, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.concurrency.fan_out import fan_out
from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_catalog_gateway import ICatalogGateway
from src.service.cinema.app.interface.i_ledger_gateway import ILedgerGateway
from src.service.cinema.app.interface.i_read_model_cache_store import IReadModelCacheStore
from src.service.cinema.app.service.identity_reconciler import IdentityReconciler
from src.service.cinema.domain.entity.home_aggregate import HomeAggregate
from src.service.cinema.domain.entity.movie_entity import (
    ALL_GENRES,
    CatalogMovie,
    Genre,
    OnChainMovie,
)


class GetHomeAggregateUseCase:
    """
    Read-Model Cache for the home screen.

    A persisted snapshot younger than the TTL is returned without any network
    access. Otherwise (or when forced) the aggregate is recomputed from the
    ledger and the catalog, persisted with a fresh timestamp and returned.
    """

    def __init__(
        self,
        *,
        ledger_gateway: ILedgerGateway,
        catalog_gateway: ICatalogGateway,
        identity_reconciler: IdentityReconciler,
        cache_store: IReadModelCacheStore,
        ttl_seconds: float = settings.READ_MODEL_CACHE_TTL_SECONDS,
    ) -> None:
        self.ledger_gateway = ledger_gateway
        self.catalog_gateway = catalog_gateway
        self.identity_reconciler = identity_reconciler
        self.cache_store = cache_store
        self.ttl_seconds = ttl_seconds
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
        cache_store: IReadModelCacheStore = Depends(Provide[Container.read_model_cache_store]),
    ) -> Self:
        return cls(
            ledger_gateway=ledger_gateway,
            catalog_gateway=catalog_gateway,
            identity_reconciler=identity_reconciler,
            cache_store=cache_store,
        )

    @Logger.io
    async def get(self, *, force_refresh: bool = False) -> HomeAggregate:
        with self.tracer.start_as_current_span(
            'use_case.get_home_aggregate', attributes={'force_refresh': force_refresh}
        ) as span:
            if not force_refresh:
                cached = await self.cache_store.load()
                if cached is not None and cached.is_fresh(
                    now=time.time(), ttl_seconds=self.ttl_seconds
                ):
                    span.set_attribute('cache_hit', True)
                    Logger.base.info('💾 [HOME] Serving cached aggregate')
                    return cached

            span.set_attribute('cache_hit', False)
            Logger.base.info(f'🌐 [HOME] Recomputing aggregate (force_refresh={force_refresh})')
            aggregate = await self._recompute()
            await self.cache_store.save(aggregate)
            return aggregate

    async def _recompute(self) -> HomeAggregate:
        loaders: List[Callable[[], Awaitable[Any]]] = [
            self.ledger_gateway.list_movies,
            self.catalog_gateway.list_popular,
            self.catalog_gateway.list_upcoming,
            self.catalog_gateway.list_genres,
        ]
        # A ledger failure aborts the whole recompute, so nothing half-built is cached
        results = await fan_out(lambda load: load(), loaders, limit=len(loaders))
        chain_movies: List[OnChainMovie] = results[0]
        popular: List[CatalogMovie] = results[1]
        upcoming: List[CatalogMovie] = results[2]
        genres: List[Genre] = results[3]

        bookable = await self.identity_reconciler.enrich_chain_movies(chain_movies)

        aggregate = HomeAggregate(
            bookable_movies=bookable,
            popular_movies=self.identity_reconciler.reconcile_catalog_movies(popular, chain_movies),
            upcoming_movies=self.identity_reconciler.reconcile_catalog_movies(
                upcoming, chain_movies
            ),
            genres=[ALL_GENRES, *[g for g in genres if g.id != ALL_GENRES.id]],
            timestamp=time.time(),
        )
        Logger.base.info(
            f'✅ [HOME] {len(aggregate.bookable_movies)} bookable, '
            f'{len(aggregate.popular_movies)} popular, {len(aggregate.upcoming_movies)} upcoming'
        )
        return aggregate
