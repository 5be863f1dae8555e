"""
Ledger Gateway - web3.py implementation of ILedgerGateway

Reads are `eth_call`s against the cinema contract. Writes are built with the
signer's address as `from`, signed locally by the wallet signer and sent raw.
"""

from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from aiohttp import ClientError
from opentelemetry import trace
from web3 import AsyncWeb3, Web3
from web3.contract import AsyncContract
from web3.contract.async_contract import AsyncContractFunction
from web3.exceptions import ContractLogicError, Web3Exception

from src.platform.concurrency.fan_out import fan_out
from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import GatewayUnavailable, TransactionRejected
from src.platform.ledger.web3_client import ledger_client
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_ledger_gateway import ILedgerGateway
from src.service.cinema.app.interface.i_wallet_signer import IWalletSigner
from src.service.cinema.domain.entity.movie_entity import OnChainMovie
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.ticket_entity import Ticket
from src.service.cinema.domain.enum.ticket_status import TicketStatus
from src.service.cinema.driven_adapter.ledger.cinema_contract_abi import CINEMA_CONTRACT_ABI


_T = TypeVar('_T')

_TRANSPORT_ERRORS = (ClientError, OSError)
_REVERT_PREFIX = 'execution reverted: '


def revert_reason(error: ContractLogicError) -> str:
    """Chain-provided revert string without the node's 'execution reverted: ' prefix."""
    message = getattr(error, 'message', None) or str(error)
    if message.startswith(_REVERT_PREFIX):
        return message[len(_REVERT_PREFIX) :]
    return message or 'execution reverted'


class LedgerGatewayImpl(ILedgerGateway):
    def __init__(
        self,
        *,
        client_factory: Callable[[], AsyncWeb3] = ledger_client.get_client,
        contract_address: str = settings.LEDGER_CONTRACT_ADDRESS,
        fan_out_limit: int = settings.LEDGER_FAN_OUT_LIMIT,
    ) -> None:
        self._client_factory = client_factory
        self._contract_address = Web3.to_checksum_address(contract_address)
        self._fan_out_limit = fan_out_limit
        self._contract: Optional[AsyncContract] = None
        self._contract_client: Optional[AsyncWeb3] = None
        self.tracer = trace.get_tracer(__name__)

    def _get_contract(self) -> AsyncContract:
        # Rebuilt whenever the RPC client was replaced (disconnect + initialize)
        w3 = self._client_factory()
        if self._contract is None or self._contract_client is not w3:
            self._contract = w3.eth.contract(address=self._contract_address, abi=CINEMA_CONTRACT_ABI)
            self._contract_client = w3
        return self._contract

    async def _call(self, fn_name: str, *args: Any) -> Any:
        fn = getattr(self._get_contract().functions, fn_name)
        try:
            return await fn(*args).call()
        except ContractLogicError:
            raise
        except (Web3Exception, *_TRANSPORT_ERRORS) as e:
            Logger.base.warning(f'⛓️ [LEDGER] {fn_name}{args} failed: {type(e).__name__}: {e}')
            raise GatewayUnavailable('Cannot reach the ledger, please try again') from e

    # ------------------------------------------------------------------ reads

    async def next_movie_id(self) -> int:
        return int(await self._call_required('getNextMovieId'))

    async def movie_by_id(self, movie_id: int) -> Optional[OnChainMovie]:
        try:
            record_id, title, is_active = await self._call('movies', movie_id)
        except ContractLogicError:
            return None
        if not int(record_id) or not title:
            return None
        return OnChainMovie(id=int(record_id), title=str(title), is_active=bool(is_active))

    async def next_showtime_id(self) -> int:
        return int(await self._call_required('getNextShowtimeId'))

    async def showtime_by_id(self, showtime_id: int) -> Optional[Showtime]:
        try:
            record = await self._call('getShowtimeDetails', showtime_id)
        except ContractLogicError:
            return None
        record_id, movie_id, theater_id, start_time, price, total_seats, seats_sold = record
        if not int(movie_id):
            return None
        return Showtime(
            id=int(record_id),
            movie_id=int(movie_id),
            theater_id=int(theater_id),
            start_time=int(start_time),
            ticket_price_wei=int(price),
            total_seats=int(total_seats),
            seats_sold=int(seats_sold),
        )

    async def seat_bitmap(self, showtime_id: int) -> List[int]:
        words = await self._call_required('getSeatsBitmap', showtime_id)
        return [int(word) for word in words]

    async def ticket_ids_by_owner(self, owner: str) -> List[int]:
        ids = await self._call_required('getTicketsByOwner', Web3.to_checksum_address(owner))
        return [int(ticket_id) for ticket_id in ids]

    async def ticket_by_id(self, ticket_id: int) -> Ticket:
        record_id, showtime_id, seat_id, owner, status = await self._call_required(
            'tickets', ticket_id
        )
        try:
            ticket_status = TicketStatus.from_chain(status)
        except ValueError as e:
            raise GatewayUnavailable(f'Ledger returned unreadable ticket {ticket_id}: {e}') from e
        if int(record_id) and int(seat_id) < 1:
            raise GatewayUnavailable(f'Ledger returned ticket {ticket_id} without a seat')
        return Ticket(
            id=int(record_id),
            showtime_id=int(showtime_id),
            seat_id=int(seat_id),
            owner=str(owner),
            status=ticket_status,
        )

    async def _call_required(self, fn_name: str, *args: Any) -> Any:
        try:
            return await self._call(fn_name, *args)
        except ContractLogicError as e:
            raise GatewayUnavailable(f'Ledger rejected {fn_name}: {revert_reason(e)}') from e

    # ------------------------------------------------------------ enumeration

    @Logger.io(truncate_content=True)
    async def list_movies(self) -> List[OnChainMovie]:
        with self.tracer.start_as_current_span('ledger.list_movies'):
            next_id = await self.next_movie_id()
            return await self._enumerate(range(1, next_id), self.movie_by_id, label='movie')

    @Logger.io(truncate_content=True)
    async def list_showtimes(self) -> List[Showtime]:
        with self.tracer.start_as_current_span('ledger.list_showtimes'):
            next_id = await self.next_showtime_id()
            return await self._enumerate(range(1, next_id), self.showtime_by_id, label='showtime')

    async def _enumerate(
        self,
        ids: range,
        fetch: Callable[[int], Awaitable[Optional[_T]]],
        *,
        label: str,
    ) -> List[_T]:
        failed_ids: list[int] = []

        async def _fetch_or_skip(record_id: int) -> Optional[_T]:
            try:
                return await fetch(record_id)
            except GatewayUnavailable:
                failed_ids.append(record_id)
                return None

        records = await fan_out(_fetch_or_skip, list(ids), limit=self._fan_out_limit)

        if ids and len(failed_ids) == len(ids):
            raise GatewayUnavailable(f'Cannot enumerate ledger {label}s, please try again')
        if failed_ids:
            Logger.base.warning(
                f'⚠️ [LEDGER] Skipped {len(failed_ids)}/{len(ids)} unreadable {label} ids: '
                f'{sorted(failed_ids)}'
            )
        return [record for record in records if record is not None]

    # ----------------------------------------------------------------- writes

    async def buy_seat(
        self, *, signer: IWalletSigner, showtime_id: int, seat_id: int, value_wei: int
    ) -> str:
        fn = self._get_contract().functions.buyTicket(showtime_id, seat_id)
        return await self._transact(signer=signer, fn=fn, value_wei=value_wei)

    async def buy_seats(
        self, *, signer: IWalletSigner, showtime_id: int, seat_ids: List[int], value_wei: int
    ) -> str:
        fn = self._get_contract().functions.buyMultipleTickets(showtime_id, list(seat_ids))
        return await self._transact(signer=signer, fn=fn, value_wei=value_wei)

    async def refund_ticket(self, *, signer: IWalletSigner, ticket_id: int) -> str:
        fn = self._get_contract().functions.refundTicket(ticket_id)
        return await self._transact(signer=signer, fn=fn, value_wei=0)

    async def _transact(
        self, *, signer: IWalletSigner, fn: AsyncContractFunction, value_wei: int
    ) -> str:
        w3 = self._client_factory()
        try:
            nonce = await w3.eth.get_transaction_count(signer.address, 'pending')
            # Gas estimation inside build_transaction surfaces reverts before anything is sent
            transaction = await fn.build_transaction(
                {
                    'from': signer.address,
                    'value': value_wei,
                    'nonce': nonce,
                    'chainId': settings.LEDGER_CHAIN_ID,
                }
            )
            raw_transaction = signer.sign_transaction(transaction)
            tx_hash = await w3.eth.send_raw_transaction(raw_transaction)
        except ContractLogicError as e:
            raise TransactionRejected(revert_reason(e)) from e
        except _TRANSPORT_ERRORS as e:
            raise GatewayUnavailable('Cannot reach the ledger, please try again') from e

        return Web3.to_hex(tx_hash)

    async def wait_for_confirmation(self, tx_hash: str) -> None:
        w3 = self._client_factory()
        try:
            receipt = await w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=settings.LEDGER_RECEIPT_TIMEOUT
            )
        except _TRANSPORT_ERRORS as e:
            raise GatewayUnavailable('Lost connection while waiting for confirmation') from e

        if receipt['status'] != 1:
            raise TransactionRejected('Transaction reverted on-chain')
