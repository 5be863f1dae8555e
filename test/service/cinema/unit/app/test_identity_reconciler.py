"""
Unit tests for IdentityReconciler

Ledger -> catalog: first search hit. Catalog -> ledger: case-insensitive exact
title match against active records. Nothing is ever promoted to bookable
without an active ledger record.
"""

from unittest.mock import AsyncMock

import pytest

from src.service.cinema.app.service.identity_reconciler import (
    IdentityReconciler,
    index_active_by_title,
)
from src.service.cinema.domain.entity.movie_entity import CatalogMovie, OnChainMovie


DUNE = CatalogMovie(catalog_id=438631, title='Dune', poster_url='https://img/dune.jpg')
HEAT = CatalogMovie(catalog_id=949, title='Heat')


@pytest.fixture
def reconciler(ledger_gateway: AsyncMock, catalog_gateway: AsyncMock) -> IdentityReconciler:
    return IdentityReconciler(ledger_gateway=ledger_gateway, catalog_gateway=catalog_gateway)


@pytest.mark.unit
class TestIndexActiveByTitle:
    def test_inactive_records_are_not_indexed(self):
        index = index_active_by_title([OnChainMovie(1, 'Dune', False)])
        assert index == {}

    def test_duplicate_titles_resolve_to_lowest_id(self):
        index = index_active_by_title(
            [OnChainMovie(5, 'Dune', True), OnChainMovie(2, 'DUNE', True)]
        )
        assert index['dune'].id == 2


@pytest.mark.unit
class TestLedgerToCatalog:
    @pytest.mark.asyncio
    async def test_enrich_joins_first_search_hit(self, reconciler, catalog_gateway):
        catalog_gateway.search_by_title.return_value = DUNE

        movie = await reconciler.enrich_chain_movie(OnChainMovie(3, 'Dune', True))

        assert movie.is_bookable is True
        assert movie.local_id == 3
        assert movie.catalog_id == DUNE.catalog_id
        assert movie.poster_url == DUNE.poster_url

    @pytest.mark.asyncio
    async def test_no_catalog_hit_stays_bookable_but_metadata_poor(
        self, reconciler, catalog_gateway
    ):
        catalog_gateway.search_by_title.return_value = None

        movie = await reconciler.enrich_chain_movie(OnChainMovie(3, 'Unknown Indie', True))

        assert movie.is_bookable is True
        assert movie.catalog_id is None

    @pytest.mark.asyncio
    async def test_title_resolution_is_memoized(self, reconciler, catalog_gateway):
        catalog_gateway.search_by_title.return_value = DUNE
        catalog_gateway.fetch_by_id.return_value = DUNE

        await reconciler.resolve_catalog('Dune')
        again = await reconciler.resolve_catalog('DUNE')

        assert again == DUNE
        catalog_gateway.search_by_title.assert_awaited_once()
        catalog_gateway.fetch_by_id.assert_awaited_once_with(DUNE.catalog_id)

    @pytest.mark.asyncio
    async def test_miss_is_retried_on_next_call(self, reconciler, catalog_gateway):
        catalog_gateway.search_by_title.return_value = None

        await reconciler.resolve_catalog('Dune')
        await reconciler.resolve_catalog('Dune')

        assert catalog_gateway.search_by_title.await_count == 2

    @pytest.mark.asyncio
    async def test_enrich_many_skips_inactive_and_keeps_order(self, reconciler, catalog_gateway):
        catalog_gateway.search_by_title.side_effect = lambda title: {
            'Dune': DUNE,
            'Heat': HEAT,
        }.get(title)

        movies = await reconciler.enrich_chain_movies(
            [
                OnChainMovie(1, 'Heat', True),
                OnChainMovie(2, 'Retired', False),
                OnChainMovie(3, 'Dune', True),
            ]
        )

        assert [m.local_id for m in movies] == [1, 3]
        assert [m.catalog_id for m in movies] == [HEAT.catalog_id, DUNE.catalog_id]


@pytest.mark.unit
class TestCatalogToLedger:
    @pytest.mark.asyncio
    async def test_case_insensitive_exact_match_is_bookable(self, reconciler, ledger_gateway):
        ledger_gateway.list_movies.return_value = [OnChainMovie(4, 'dUnE', True)]

        movie = await reconciler.reconcile_catalog_movie(DUNE)

        assert movie.is_bookable is True
        assert movie.local_id == 4
        assert movie.catalog_id == DUNE.catalog_id

    @pytest.mark.asyncio
    async def test_no_match_is_never_bookable(self, reconciler, ledger_gateway):
        ledger_gateway.list_movies.return_value = [OnChainMovie(4, 'Dune: Part Two', True)]

        movie = await reconciler.reconcile_catalog_movie(DUNE)

        assert movie.is_bookable is False
        assert movie.grouped_showtimes is None
        assert movie.local_id == DUNE.catalog_id

    @pytest.mark.asyncio
    async def test_inactive_match_is_never_bookable(self, reconciler, ledger_gateway):
        ledger_gateway.list_movies.return_value = [OnChainMovie(4, 'Dune', False)]

        movie = await reconciler.reconcile_catalog_movie(DUNE)

        assert movie.is_bookable is False

    @pytest.mark.asyncio
    async def test_prefetched_ledger_list_skips_the_scan(self, reconciler, ledger_gateway):
        match = await reconciler.find_chain_match('Dune', [OnChainMovie(4, 'Dune', True)])

        assert match is not None and match.id == 4
        ledger_gateway.list_movies.assert_not_awaited()

    def test_batch_reconcile_uses_one_index(self, reconciler):
        chain = [OnChainMovie(1, 'Heat', True)]

        movies = reconciler.reconcile_catalog_movies([DUNE, HEAT], chain)

        assert [(m.title, m.is_bookable) for m in movies] == [('Dune', False), ('Heat', True)]

    def test_whitespace_difference_is_not_a_match(self, reconciler):
        chain = [OnChainMovie(1, 'Dune', True)]

        movies = reconciler.reconcile_catalog_movies(
            [CatalogMovie(catalog_id=9, title='Dune ')], chain
        )

        assert movies[0].is_bookable is False
        assert movies[0].local_id == 9
