from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_catalog_gateway import ICatalogGateway
from src.service.cinema.domain.entity.movie_entity import Movie


class SearchMoviesUseCase:
    def __init__(self, *, catalog_gateway: ICatalogGateway) -> None:
        self.catalog_gateway = catalog_gateway

    @classmethod
    @inject
    def depends(
        cls,
        catalog_gateway: ICatalogGateway = Depends(Provide[Container.catalog_gateway]),
    ) -> Self:
        return cls(catalog_gateway=catalog_gateway)

    @Logger.io
    async def search(self, query: str) -> List[Movie]:
        query = query.strip()
        if not query:
            return []
        hits = await self.catalog_gateway.search(query)
        Logger.base.info(f'🔍 [SEARCH] "{query}" -> {len(hits)} hits')
        return [Movie.catalog_only(hit) for hit in hits]
