"""
Catalog Gateway - httpx implementation of ICatalogGateway (TMDB compatible API)

Response shaping turns `poster_path` / `backdrop_path` fragments into absolute
image URLs. No retries: a failed request degrades to None / [].
"""

from typing import Any, List, Optional

import httpx

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_catalog_gateway import ICatalogGateway
from src.service.cinema.domain.entity.movie_entity import CastMember, CatalogMovie, Genre, Trailer


def _image_url(base: str, path: Optional[str]) -> Optional[str]:
    return f'{base}{path}' if path else None


def _items(data: dict[str, Any], key: str) -> list[Any]:
    items = data.get(key)
    return items if isinstance(items, list) else []


def shape_movie(payload: dict[str, Any]) -> CatalogMovie:
    """Map a catalog movie payload (summary or detail) to a CatalogMovie."""
    poster_path = payload.get('poster_path')
    backdrop_path = payload.get('backdrop_path')

    genres = None
    if 'genres' in payload:
        genres = [Genre(id=g['id'], name=g['name']) for g in payload.get('genres') or []]

    cast = None
    if 'credits' in payload:
        cast = [
            CastMember(
                id=member['id'],
                name=member.get('name', ''),
                character=member.get('character') or '',
                profile_url=_image_url(
                    settings.CATALOG_PROFILE_BASE_URL, member.get('profile_path')
                ),
            )
            for member in (payload.get('credits') or {}).get('cast', [])
        ]

    trailers = None
    if 'videos' in payload:
        trailers = [
            Trailer(
                key=video['key'],
                name=video.get('name', ''),
                site=video.get('site', ''),
                type=video.get('type', ''),
            )
            for video in (payload.get('videos') or {}).get('results', [])
            if video.get('site') == 'YouTube' and video.get('type') in ('Trailer', 'Teaser')
        ]

    genre_ids = payload.get('genre_ids')
    if genre_ids is None and genres is not None:
        genre_ids = [genre.id for genre in genres]

    return CatalogMovie(
        catalog_id=int(payload['id']),
        title=payload.get('title') or '',
        overview=payload.get('overview') or '',
        rating=float(payload.get('vote_average') or 0.0),
        poster_path=poster_path,
        backdrop_path=backdrop_path,
        poster_url=_image_url(settings.CATALOG_IMAGE_BASE_URL, poster_path),
        backdrop_url=_image_url(settings.CATALOG_BACKDROP_BASE_URL, backdrop_path),
        genre_ids=list(genre_ids or []),
        release_date=payload.get('release_date') or None,
        runtime=payload.get('runtime'),
        genres=genres,
        cast=cast,
        trailers=trailers,
    )


class CatalogGatewayImpl(ICatalogGateway):
    def __init__(self, *, client: Optional[httpx.AsyncClient] = None) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=settings.CATALOG_API_BASE_URL,
            timeout=settings.CATALOG_REQUEST_TIMEOUT,
        )
        # Catalog records are immutable, so entries never need eviction
        self._details_by_id: dict[int, CatalogMovie] = {}

    async def _get(self, path: str, **params: Any) -> Optional[dict[str, Any]]:
        query = {'api_key': settings.CATALOG_API_KEY.get_secret_value(), **params}
        try:
            response = await self._client.get(path, params=query)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            Logger.base.warning(f'🎞️ [CATALOG] GET {path} failed: {type(e).__name__}: {e}')
            return None
        if not isinstance(data, dict):
            Logger.base.warning(
                f'🎞️ [CATALOG] GET {path} returned {type(data).__name__}, expected an object'
            )
            return None
        return data

    async def _list(self, path: str, **params: Any) -> List[CatalogMovie]:
        data = await self._get(path, **params)
        if not data:
            return []
        movies = []
        for item in _items(data, 'results'):
            try:
                movies.append(shape_movie(item))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                Logger.base.warning(f'🎞️ [CATALOG] Skipped malformed item from {path}: {e}')
        return movies

    async def search(self, query: str) -> List[CatalogMovie]:
        if not query.strip():
            return []
        return await self._list('/search/movie', query=query)

    async def search_by_title(self, title: str) -> Optional[CatalogMovie]:
        results = await self.search(title)
        if not results:
            Logger.base.info(f'🔍 [CATALOG] No results for title "{title}"')
            return None
        return await self.fetch_by_id(results[0].catalog_id)

    async def fetch_by_id(self, catalog_id: int) -> Optional[CatalogMovie]:
        if (cached := self._details_by_id.get(catalog_id)) is not None:
            return cached

        data = await self._get(f'/movie/{catalog_id}', append_to_response='videos,credits')
        if not data:
            return None
        try:
            movie = shape_movie(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            Logger.base.warning(f'🎞️ [CATALOG] Malformed detail for {catalog_id}: {e}')
            return None

        # Failures are not memoized so the next call can succeed
        self._details_by_id[catalog_id] = movie
        return movie

    async def list_popular(self) -> List[CatalogMovie]:
        return await self._list('/movie/popular')

    async def list_upcoming(self) -> List[CatalogMovie]:
        return await self._list('/movie/upcoming')

    async def list_genres(self) -> List[Genre]:
        data = await self._get('/genre/movie/list')
        if not data:
            return []
        genres = []
        for item in _items(data, 'genres'):
            try:
                genres.append(Genre(id=int(item['id']), name=str(item['name'])))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                Logger.base.warning(f'🎞️ [CATALOG] Skipped malformed genre: {e}')
        return genres

    async def aclose(self) -> None:
        await self._client.aclose()
