import pytest

from src.service.cinema.domain.entity.home_aggregate import HomeAggregate
from src.service.cinema.domain.entity.movie_entity import (
    ALL_GENRES,
    CastMember,
    CatalogMovie,
    Genre,
    Movie,
    OnChainMovie,
    Trailer,
)
from src.service.cinema.domain.entity.showtime_entity import ShowtimeGroup, ShowtimeSlot
from src.service.cinema.domain.enum.ticket_status import TicketStatus


CATALOG = CatalogMovie(
    catalog_id=550,
    title='Fight Club',
    overview='An insomniac office worker...',
    rating=8.4,
    poster_url='https://img/w500/poster.jpg',
    genre_ids=[18],
    genres=[Genre(id=18, name='Drama')],
    cast=[CastMember(id=1, name='Edward Norton', character='Narrator')],
    trailers=[Trailer(key='abc123')],
)


@pytest.mark.unit
class TestMovie:
    def test_bookable_uses_ledger_id_and_title(self):
        movie = Movie.bookable(OnChainMovie(id=7, title='Fight Club', is_active=True), CATALOG)

        assert movie.local_id == 7
        assert movie.catalog_id == 550
        assert movie.is_bookable is True
        assert movie.poster_url == CATALOG.poster_url

    def test_bookable_without_catalog_is_metadata_poor(self):
        movie = Movie.bookable(OnChainMovie(id=7, title='Indie Film', is_active=True), None)

        assert movie.is_bookable is True
        assert movie.catalog_id is None
        assert movie.poster_url is None

    def test_inactive_ledger_movie_is_never_bookable(self):
        with pytest.raises(ValueError):
            Movie.bookable(OnChainMovie(id=7, title='Old', is_active=False), CATALOG)

    def test_catalog_only_uses_catalog_id(self):
        movie = Movie.catalog_only(CATALOG)

        assert movie.local_id == 550
        assert movie.is_bookable is False
        assert movie.grouped_showtimes is None

    def test_showtimes_rejected_on_non_bookable_movie(self):
        with pytest.raises(ValueError):
            Movie(local_id=1, title='x', is_bookable=False, grouped_showtimes=[])

    def test_dict_round_trip_keeps_nested_types(self):
        groups = [
            ShowtimeGroup(
                date='2025-03-03',
                formatted_date='Monday, 3 March',
                times=[ShowtimeSlot(showtime_id=1, start_time=1, time_string='13:00', price='0.01')],
            )
        ]
        movie = Movie.bookable(
            OnChainMovie(id=7, title='Fight Club', is_active=True), CATALOG, grouped_showtimes=groups
        )

        assert Movie.from_dict(movie.to_dict()) == movie


@pytest.mark.unit
class TestHomeAggregate:
    @pytest.fixture
    def aggregate(self) -> HomeAggregate:
        drama = Movie.catalog_only(CATALOG)
        comedy = Movie.catalog_only(CatalogMovie(catalog_id=2, title='Comedy', genre_ids=[35]))
        return HomeAggregate(
            bookable_movies=[Movie.bookable(OnChainMovie(1, 'Chain', True), None)],
            popular_movies=[drama, comedy],
            upcoming_movies=[comedy],
            genres=[ALL_GENRES, Genre(id=18, name='Drama'), Genre(id=35, name='Comedy')],
            timestamp=1_000.0,
        )

    def test_fresh_strictly_below_ttl(self, aggregate: HomeAggregate):
        assert aggregate.is_fresh(now=1_000.0 + 3599, ttl_seconds=3600) is True
        assert aggregate.is_fresh(now=1_000.0 + 3600, ttl_seconds=3600) is False

    def test_filter_by_genre(self, aggregate: HomeAggregate):
        filtered = aggregate.filter_by_genre(35)

        assert [m.title for m in filtered.popular_movies] == ['Comedy']
        assert [m.title for m in filtered.upcoming_movies] == ['Comedy']
        assert filtered.bookable_movies == aggregate.bookable_movies

    def test_genre_zero_means_no_filter(self, aggregate: HomeAggregate):
        assert aggregate.filter_by_genre(ALL_GENRES.id) is aggregate

    def test_persisted_keys_are_camel_case(self, aggregate: HomeAggregate):
        data = aggregate.to_dict()

        assert set(data) == {
            'bookableMovies',
            'popularMovies',
            'upcomingMovies',
            'genres',
            'timestamp',
        }
        assert HomeAggregate.from_dict(data) == aggregate


@pytest.mark.unit
class TestTicketStatus:
    @pytest.mark.parametrize(
        'code,expected',
        [(0, TicketStatus.ACTIVE), (1, TicketStatus.USED), (2, TicketStatus.REFUNDED)],
    )
    def test_from_chain(self, code, expected):
        assert TicketStatus.from_chain(code) is expected

    def test_unknown_code(self):
        with pytest.raises(ValueError):
            TicketStatus.from_chain(9)
