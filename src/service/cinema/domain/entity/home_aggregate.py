from typing import Any, List

import attrs

from src.service.cinema.domain.entity.movie_entity import ALL_GENRES, Genre, Movie


@attrs.define(frozen=True)
class HomeAggregate:
    """
    Combined home-screen read model, persisted as a single cache record.

    Valid only while `now - timestamp < ttl`; a stale snapshot is treated as absent.
    """

    bookable_movies: List[Movie]
    popular_movies: List[Movie]
    upcoming_movies: List[Movie]
    genres: List[Genre]
    timestamp: float

    def is_fresh(self, *, now: float, ttl_seconds: float) -> bool:
        return now - self.timestamp < ttl_seconds

    def filter_by_genre(self, genre_id: int) -> 'HomeAggregate':
        """View filtered to one genre. Genre 0 ('All') returns the aggregate unchanged."""
        if genre_id == ALL_GENRES.id:
            return self
        return attrs.evolve(
            self,
            popular_movies=[m for m in self.popular_movies if genre_id in m.genre_ids],
            upcoming_movies=[m for m in self.upcoming_movies if genre_id in m.genre_ids],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'bookableMovies': [movie.to_dict() for movie in self.bookable_movies],
            'popularMovies': [movie.to_dict() for movie in self.popular_movies],
            'upcomingMovies': [movie.to_dict() for movie in self.upcoming_movies],
            'genres': [attrs.asdict(genre) for genre in self.genres],
            'timestamp': self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'HomeAggregate':
        return cls(
            bookable_movies=[Movie.from_dict(m) for m in data['bookableMovies']],
            popular_movies=[Movie.from_dict(m) for m in data['popularMovies']],
            upcoming_movies=[Movie.from_dict(m) for m in data['upcomingMovies']],
            genres=[Genre(**genre) for genre in data['genres']],
            timestamp=float(data['timestamp']),
        )
