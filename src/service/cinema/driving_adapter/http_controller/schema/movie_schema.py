from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response models are read off domain objects and serialized in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class GenreResponse(CamelModel):
    id: int
    name: str


class CastMemberResponse(CamelModel):
    id: int
    name: str
    character: str = ''
    profile_url: Optional[str] = None


class TrailerResponse(CamelModel):
    key: str
    name: str = ''
    site: str = 'YouTube'
    type: str = 'Trailer'


class ShowtimeSlotResponse(CamelModel):
    showtime_id: int
    start_time: int
    time_string: str
    price: str


class ShowtimeGroupResponse(CamelModel):
    date: str
    formatted_date: str
    times: List[ShowtimeSlotResponse]


class MovieResponse(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'localId': 1,
                'catalogId': 550,
                'title': 'Fight Club',
                'isBookable': True,
                'overview': 'A ticking-time-bomb insomniac...',
                'rating': 8.4,
                'posterUrl': 'https://image.tmdb.org/t/p/w500/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg',
                'backdropUrl': None,
                'genreIds': [18],
                'groupedShowtimes': None,
            }
        }
    )

    local_id: int
    catalog_id: Optional[int] = None
    title: str
    is_bookable: bool
    overview: str = ''
    rating: float = 0.0
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    genre_ids: List[int] = []
    release_date: Optional[str] = None
    runtime: Optional[int] = None
    genres: Optional[List[GenreResponse]] = None
    cast: Optional[List[CastMemberResponse]] = None
    trailers: Optional[List[TrailerResponse]] = None
    grouped_showtimes: Optional[List[ShowtimeGroupResponse]] = None


class HomeResponse(CamelModel):
    bookable_movies: List[MovieResponse]
    popular_movies: List[MovieResponse]
    upcoming_movies: List[MovieResponse]
    genres: List[GenreResponse]
    timestamp: float
