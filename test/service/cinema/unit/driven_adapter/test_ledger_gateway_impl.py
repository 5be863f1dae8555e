"""
Unit tests for LedgerGatewayImpl

The web3 client is replaced by MagicMock / AsyncMock objects; contract view
calls are stubbed at the gateway's `_call` seam.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import ClientConnectionError
from web3.exceptions import ContractLogicError

from src.platform.exception.exceptions import GatewayUnavailable, TransactionRejected
from src.service.cinema.domain.enum.ticket_status import TicketStatus
from src.service.cinema.driven_adapter.ledger.ledger_gateway_impl import (
    LedgerGatewayImpl,
    revert_reason,
)


TX_HASH_BYTES = bytes.fromhex('ab' * 32)


@pytest.fixture
def w3() -> MagicMock:
    client = MagicMock()
    client.eth.get_transaction_count = AsyncMock(return_value=7)
    client.eth.send_raw_transaction = AsyncMock(return_value=TX_HASH_BYTES)
    client.eth.wait_for_transaction_receipt = AsyncMock(return_value={'status': 1})
    return client


@pytest.fixture
def gateway(w3: MagicMock) -> LedgerGatewayImpl:
    return LedgerGatewayImpl(client_factory=lambda: w3, fan_out_limit=4)


def _stub_calls(gateway: LedgerGatewayImpl, handler) -> None:
    async def fake_call(fn_name: str, *args: Any) -> Any:
        return handler(fn_name, *args)

    gateway._call = fake_call  # type: ignore[method-assign]


@pytest.mark.unit
class TestReads:
    @pytest.mark.asyncio
    async def test_movie_record(self, gateway):
        _stub_calls(gateway, lambda fn, movie_id: (movie_id, 'Dune', True))

        movie = await gateway.movie_by_id(3)

        assert (movie.id, movie.title, movie.is_active) == (3, 'Dune', True)

    @pytest.mark.asyncio
    async def test_empty_movie_record_is_none(self, gateway):
        _stub_calls(gateway, lambda fn, movie_id: (0, '', False))

        assert await gateway.movie_by_id(3) is None

    @pytest.mark.asyncio
    async def test_showtime_with_zero_movie_id_is_none(self, gateway):
        _stub_calls(gateway, lambda fn, showtime_id: (showtime_id, 0, 0, 0, 0, 0, 0))

        assert await gateway.showtime_by_id(9) is None

    @pytest.mark.asyncio
    async def test_ticket_status_is_decoded(self, gateway):
        owner = '0x00000000000000000000000000000000000000A1'
        _stub_calls(gateway, lambda fn, ticket_id: (ticket_id, 5, 12, owner, 2))

        ticket = await gateway.ticket_by_id(42)

        assert ticket.status is TicketStatus.REFUNDED
        assert (ticket.showtime_id, ticket.seat_id) == (5, 12)

    @pytest.mark.asyncio
    async def test_unknown_ticket_status_is_an_unreadable_record(self, gateway):
        owner = '0x00000000000000000000000000000000000000A1'
        _stub_calls(gateway, lambda fn, ticket_id: (ticket_id, 5, 12, owner, 9))

        with pytest.raises(GatewayUnavailable):
            await gateway.ticket_by_id(42)

    @pytest.mark.asyncio
    async def test_ticket_without_seat_is_an_unreadable_record(self, gateway):
        owner = '0x00000000000000000000000000000000000000A1'
        _stub_calls(gateway, lambda fn, ticket_id: (ticket_id, 5, 0, owner, 0))

        with pytest.raises(GatewayUnavailable):
            await gateway.ticket_by_id(42)

    @pytest.mark.asyncio
    async def test_empty_ticket_record_is_returned_as_is(self, gateway):
        empty_owner = '0x' + '0' * 40
        _stub_calls(gateway, lambda fn, ticket_id: (0, 0, 0, empty_owner, 0))

        ticket = await gateway.ticket_by_id(42)

        assert ticket.id == 0

    def test_contract_is_rebuilt_for_a_new_client(self):
        # Given: the RPC client is replaced between two calls
        clients = [MagicMock(), MagicMock()]
        gateway = LedgerGatewayImpl(client_factory=lambda: clients[0])

        first = gateway._get_contract()
        assert gateway._get_contract() is first
        clients.pop(0)

        # When
        second = gateway._get_contract()

        # Then
        assert second is not first
        assert second is clients[0].eth.contract.return_value

    @pytest.mark.asyncio
    async def test_transport_failure_is_gateway_unavailable(self, gateway, w3):
        contract = w3.eth.contract.return_value
        contract.functions.getNextMovieId.return_value.call = AsyncMock(
            side_effect=ClientConnectionError('refused')
        )

        with pytest.raises(GatewayUnavailable):
            await gateway.next_movie_id()


@pytest.mark.unit
class TestEnumeration:
    @pytest.mark.asyncio
    async def test_sparse_and_failed_ids_are_skipped_in_id_order(self, gateway):
        # Given: id 2 is empty, id 3 cannot be read, others are fine
        def handler(fn: str, *args: Any) -> Any:
            if fn == 'getNextMovieId':
                return 6
            movie_id = args[0]
            if movie_id == 2:
                return (0, '', False)
            if movie_id == 3:
                raise GatewayUnavailable()
            return (movie_id, f'Movie {movie_id}', movie_id != 5)

        _stub_calls(gateway, handler)

        # When
        movies = await gateway.list_movies()

        # Then
        assert [m.id for m in movies] == [1, 4, 5]
        assert movies[-1].is_active is False

    @pytest.mark.asyncio
    async def test_every_id_failing_is_an_outage(self, gateway):
        def handler(fn: str, *args: Any) -> Any:
            if fn == 'getNextShowtimeId':
                return 3
            raise GatewayUnavailable()

        _stub_calls(gateway, handler)

        with pytest.raises(GatewayUnavailable):
            await gateway.list_showtimes()

    @pytest.mark.asyncio
    async def test_no_records(self, gateway):
        _stub_calls(gateway, lambda fn: 1)

        assert await gateway.list_movies() == []


@pytest.mark.unit
class TestWrites:
    @pytest.mark.asyncio
    async def test_buy_seats_signs_and_sends_exact_value(self, gateway, w3, wallet_signer):
        contract = w3.eth.contract.return_value
        build = AsyncMock(return_value={'to': 'contract', 'value': 2 * 10**16})
        contract.functions.buyMultipleTickets.return_value.build_transaction = build

        tx_hash = await gateway.buy_seats(
            signer=wallet_signer, showtime_id=5, seat_ids=[1, 2], value_wei=2 * 10**16
        )

        contract.functions.buyMultipleTickets.assert_called_once_with(5, [1, 2])
        tx_params = build.await_args.args[0]
        assert tx_params['value'] == 2 * 10**16
        assert tx_params['from'] == wallet_signer.address
        assert tx_params['nonce'] == 7
        wallet_signer.sign_transaction.assert_called_once_with(build.return_value)
        w3.eth.send_raw_transaction.assert_awaited_once_with(b'\x01signed')
        assert tx_hash == '0x' + 'ab' * 32

    @pytest.mark.asyncio
    async def test_revert_reason_is_passed_through(self, gateway, w3, wallet_signer):
        contract = w3.eth.contract.return_value
        contract.functions.buyTicket.return_value.build_transaction = AsyncMock(
            side_effect=ContractLogicError('execution reverted: Seat already taken')
        )

        with pytest.raises(TransactionRejected) as exc_info:
            await gateway.buy_seat(signer=wallet_signer, showtime_id=5, seat_id=1, value_wei=1)

        assert exc_info.value.reason == 'Seat already taken'
        w3.eth.send_raw_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reverted_receipt(self, gateway, w3):
        w3.eth.wait_for_transaction_receipt.return_value = {'status': 0}

        with pytest.raises(TransactionRejected):
            await gateway.wait_for_confirmation('0x' + 'ab' * 32)

    def test_revert_reason_without_prefix(self):
        assert revert_reason(ContractLogicError('Not ticket owner')) == 'Not ticket owner'
