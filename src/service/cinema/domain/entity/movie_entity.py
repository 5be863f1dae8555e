from typing import Any, List, Optional

import attrs

from src.service.cinema.domain.entity.showtime_entity import ShowtimeGroup


@attrs.define(frozen=True)
class Genre:
    id: int
    name: str


ALL_GENRES = Genre(id=0, name='All')


@attrs.define(frozen=True)
class CastMember:
    id: int
    name: str
    character: str = ''
    profile_url: Optional[str] = None


@attrs.define(frozen=True)
class Trailer:
    key: str
    name: str = ''
    site: str = 'YouTube'
    type: str = 'Trailer'


@attrs.define(frozen=True)
class OnChainMovie:
    """Ledger movie record. Source of truth for bookability."""

    id: int
    title: str
    is_active: bool


@attrs.define(frozen=True)
class CatalogMovie:
    """Immutable snapshot from the catalog service, with image URLs already derived."""

    catalog_id: int
    title: str
    overview: str = ''
    rating: float = 0.0
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    genre_ids: List[int] = attrs.field(factory=list)
    release_date: Optional[str] = None
    runtime: Optional[int] = None
    genres: Optional[List[Genre]] = None
    cast: Optional[List[CastMember]] = None
    trailers: Optional[List[Trailer]] = None


def _showtimes_only_when_bookable(
    instance: 'Movie', attribute: attrs.Attribute, value: Optional[List[ShowtimeGroup]]
) -> None:
    if value is not None and not instance.is_bookable:
        raise ValueError('grouped_showtimes can only be set on a bookable movie')


@attrs.define
class Movie:
    """
    Merged view of a ledger record and a catalog record.

    `local_id` is the ledger id when bookable and the catalog id otherwise.
    `is_bookable` is true only when an active ledger record was joined.
    """

    local_id: int
    title: str
    is_bookable: bool
    catalog_id: Optional[int] = None
    overview: str = ''
    rating: float = 0.0
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    genre_ids: List[int] = attrs.field(factory=list)
    release_date: Optional[str] = None
    runtime: Optional[int] = None
    genres: Optional[List[Genre]] = None
    cast: Optional[List[CastMember]] = None
    trailers: Optional[List[Trailer]] = None
    grouped_showtimes: Optional[List[ShowtimeGroup]] = attrs.field(
        default=None, validator=_showtimes_only_when_bookable
    )

    @classmethod
    def bookable(
        cls,
        chain_movie: OnChainMovie,
        catalog: Optional[CatalogMovie],
        *,
        grouped_showtimes: Optional[List[ShowtimeGroup]] = None,
    ) -> 'Movie':
        if not chain_movie.is_active:
            raise ValueError(f'Ledger movie {chain_movie.id} is inactive and cannot be booked')

        if catalog is None:
            # Bookable but metadata-poor: the ledger title is all we have
            return cls(
                local_id=chain_movie.id,
                title=chain_movie.title,
                is_bookable=True,
                grouped_showtimes=grouped_showtimes,
            )

        return cls(
            local_id=chain_movie.id,
            title=chain_movie.title,
            is_bookable=True,
            grouped_showtimes=grouped_showtimes,
            **_catalog_fields(catalog),
        )

    @classmethod
    def catalog_only(cls, catalog: CatalogMovie) -> 'Movie':
        return cls(
            local_id=catalog.catalog_id,
            title=catalog.title,
            is_bookable=False,
            **_catalog_fields(catalog),
        )

    def to_dict(self) -> dict[str, Any]:
        return attrs.asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Movie':
        data = dict(data)
        for key, item_type in (('genres', Genre), ('cast', CastMember), ('trailers', Trailer)):
            if data.get(key) is not None:
                data[key] = [item_type(**item) for item in data[key]]
        if data.get('grouped_showtimes') is not None:
            data['grouped_showtimes'] = [
                ShowtimeGroup.from_dict(group) for group in data['grouped_showtimes']
            ]
        return cls(**data)


def _catalog_fields(catalog: CatalogMovie) -> dict[str, Any]:
    return {
        'catalog_id': catalog.catalog_id,
        'overview': catalog.overview,
        'rating': catalog.rating,
        'poster_url': catalog.poster_url,
        'backdrop_url': catalog.backdrop_url,
        'genre_ids': list(catalog.genre_ids),
        'release_date': catalog.release_date,
        'runtime': catalog.runtime,
        'genres': catalog.genres,
        'cast': catalog.cast,
        'trailers': catalog.trailers,
    }
