"""
Unit tests for CatalogGatewayImpl

The catalog HTTP API is served by an httpx.MockTransport, so requests are
asserted on path and query without any network.
"""

from collections.abc import Callable

import httpx
import pytest

from src.platform.config.core_setting import settings
from src.service.cinema.driven_adapter.catalog.catalog_gateway_impl import (
    CatalogGatewayImpl,
    shape_movie,
)


DETAIL_PAYLOAD = {
    'id': 438631,
    'title': 'Dune',
    'overview': 'Paul Atreides...',
    'vote_average': 7.8,
    'poster_path': '/d5NXSklXo0qyIYkgV94XAgMIckC.jpg',
    'backdrop_path': '/jYEW5xZkZk2WTrdbMGAPFuBqbDc.jpg',
    'release_date': '2021-09-15',
    'runtime': 155,
    'genres': [{'id': 878, 'name': 'Science Fiction'}, {'id': 12, 'name': 'Adventure'}],
    'credits': {
        'cast': [
            {
                'id': 1190668,
                'name': 'Timothée Chalamet',
                'character': 'Paul Atreides',
                'profile_path': '/BE2sdjpgsa2rNTFa66f7upkaOP.jpg',
            },
            {'id': 2, 'name': 'No Photo', 'character': None, 'profile_path': None},
        ]
    },
    'videos': {
        'results': [
            {'key': 'n9xhJrPXop4', 'name': 'Official Trailer', 'site': 'YouTube', 'type': 'Trailer'},
            {'key': 'xyz', 'name': 'Featurette', 'site': 'YouTube', 'type': 'Featurette'},
            {'key': 'vim', 'name': 'Vimeo Trailer', 'site': 'Vimeo', 'type': 'Trailer'},
        ]
    },
}


def _gateway(handler: Callable[[httpx.Request], httpx.Response]) -> CatalogGatewayImpl:
    client = httpx.AsyncClient(
        base_url='https://catalog.test/3', transport=httpx.MockTransport(handler)
    )
    return CatalogGatewayImpl(client=client)


@pytest.mark.unit
class TestShapeMovie:
    def test_detail_payload(self):
        movie = shape_movie(DETAIL_PAYLOAD)

        assert movie.catalog_id == 438631
        assert movie.poster_url == f'{settings.CATALOG_IMAGE_BASE_URL}{DETAIL_PAYLOAD["poster_path"]}'
        assert movie.backdrop_url.startswith(settings.CATALOG_BACKDROP_BASE_URL)
        assert movie.genre_ids == [878, 12]
        assert [g.name for g in movie.genres] == ['Science Fiction', 'Adventure']
        assert movie.cast[0].profile_url.startswith(settings.CATALOG_PROFILE_BASE_URL)
        assert movie.cast[1].profile_url is None
        assert movie.cast[1].character == ''
        assert [t.key for t in movie.trailers] == ['n9xhJrPXop4']

    def test_summary_payload_has_no_detail_sections(self):
        movie = shape_movie({'id': 1, 'title': 'X', 'genre_ids': [35], 'poster_path': None})

        assert movie.poster_url is None
        assert movie.genre_ids == [35]
        assert movie.cast is None and movie.trailers is None and movie.genres is None


@pytest.mark.unit
class TestCatalogGateway:
    @pytest.mark.asyncio
    async def test_search_by_title_fetches_first_hit_detail(self):
        # Given
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.path.endswith('/search/movie'):
                return httpx.Response(
                    200, json={'results': [{'id': 438631, 'title': 'Dune'}, {'id': 9, 'title': 'Dune'}]}
                )
            return httpx.Response(200, json=DETAIL_PAYLOAD)

        gateway = _gateway(handler)

        # When
        movie = await gateway.search_by_title('Dune')

        # Then
        assert movie is not None and movie.catalog_id == 438631
        assert seen[0].url.params['query'] == 'Dune'
        assert seen[0].url.params['api_key'] == settings.CATALOG_API_KEY.get_secret_value()
        assert seen[1].url.path.endswith('/movie/438631')
        assert seen[1].url.params['append_to_response'] == 'videos,credits'

    @pytest.mark.asyncio
    async def test_search_without_hits_returns_none(self):
        gateway = _gateway(lambda request: httpx.Response(200, json={'results': []}))

        assert await gateway.search_by_title('Nothing Like This') is None

    @pytest.mark.asyncio
    async def test_fetch_by_id_is_memoized(self):
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(200, json=DETAIL_PAYLOAD)

        gateway = _gateway(handler)

        first = await gateway.fetch_by_id(438631)
        second = await gateway.fetch_by_id(438631)

        assert first is second
        assert calls == 1

    @pytest.mark.asyncio
    async def test_failed_fetch_is_not_memoized(self):
        responses = [httpx.Response(500), httpx.Response(200, json=DETAIL_PAYLOAD)]
        gateway = _gateway(lambda request: responses.pop(0))

        assert await gateway.fetch_by_id(438631) is None
        assert (await gateway.fetch_by_id(438631)).title == 'Dune'

    @pytest.mark.asyncio
    async def test_transport_error_degrades_to_empty_list(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError('catalog down', request=request)

        gateway = _gateway(handler)

        assert await gateway.list_popular() == []
        assert await gateway.list_genres() == []
        assert await gateway.fetch_by_id(1) is None

    @pytest.mark.asyncio
    async def test_lists_hit_their_endpoints_and_skip_malformed_items(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith('/genre/movie/list'):
                return httpx.Response(200, json={'genres': [{'id': 28, 'name': 'Action'}]})
            return httpx.Response(
                200, json={'results': [{'id': 1, 'title': request.url.path}, {'title': 'no id'}]}
            )

        gateway = _gateway(handler)

        popular = await gateway.list_popular()
        upcoming = await gateway.list_upcoming()
        genres = await gateway.list_genres()

        assert [m.title for m in popular] == ['/3/movie/popular']
        assert [m.title for m in upcoming] == ['/3/movie/upcoming']
        assert [(g.id, g.name) for g in genres] == [(28, 'Action')]

    @pytest.mark.asyncio
    async def test_blank_search_makes_no_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError('no request expected')

        gateway = _gateway(handler)

        assert await gateway.search('   ') == []

    @pytest.mark.asyncio
    async def test_malformed_genre_entries_are_skipped(self):
        gateway = _gateway(
            lambda request: httpx.Response(
                200, json={'genres': [{'name': 'Action'}, 'Drama', {'id': 35, 'name': 'Comedy'}]}
            )
        )

        genres = await gateway.list_genres()

        assert [(g.id, g.name) for g in genres] == [(35, 'Comedy')]

    @pytest.mark.asyncio
    async def test_non_object_body_degrades_to_empty(self):
        gateway = _gateway(lambda request: httpx.Response(200, json=['unexpected']))

        assert await gateway.list_popular() == []
        assert await gateway.list_genres() == []
        assert await gateway.fetch_by_id(1) is None

    @pytest.mark.asyncio
    async def test_non_list_results_degrade_to_empty(self):
        gateway = _gateway(lambda request: httpx.Response(200, json={'results': {'id': 1}}))

        assert await gateway.list_upcoming() == []
