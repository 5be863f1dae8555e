from typing import List

from fastapi import APIRouter, Depends, Query
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.get_home_aggregate_use_case import GetHomeAggregateUseCase
from src.service.cinema.app.query.get_movie_detail_use_case import GetMovieDetailUseCase
from src.service.cinema.app.query.search_movies_use_case import SearchMoviesUseCase
from src.service.cinema.driving_adapter.http_controller.schema.movie_schema import (
    HomeResponse,
    MovieResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('/home')
@Logger.io
async def get_home(
    force_refresh: bool = False,
    genre_id: int = Query(default=0, ge=0),
    use_case: GetHomeAggregateUseCase = Depends(GetHomeAggregateUseCase.depends),
) -> HomeResponse:
    with tracer.start_as_current_span('controller.get_home') as span:
        span.set_attribute('genre_id', genre_id)
        aggregate = await use_case.get(force_refresh=force_refresh)
        return HomeResponse.model_validate(aggregate.filter_by_genre(genre_id))


@router.get('/search')
@Logger.io
async def search_movies(
    query: str = '',
    use_case: SearchMoviesUseCase = Depends(SearchMoviesUseCase.depends),
) -> List[MovieResponse]:
    movies = await use_case.search(query)
    return [MovieResponse.model_validate(movie) for movie in movies]


@router.get('/catalog/{catalog_id}')
@Logger.io
async def get_catalog_movie(
    catalog_id: int,
    use_case: GetMovieDetailUseCase = Depends(GetMovieDetailUseCase.depends),
) -> MovieResponse:
    movie = await use_case.get_by_catalog_id(catalog_id)
    return MovieResponse.model_validate(movie)


@router.get('/{movie_id}')
@Logger.io
async def get_movie(
    movie_id: int,
    use_case: GetMovieDetailUseCase = Depends(GetMovieDetailUseCase.depends),
) -> MovieResponse:
    movie = await use_case.get_by_ledger_id(movie_id)
    return MovieResponse.model_validate(movie)
