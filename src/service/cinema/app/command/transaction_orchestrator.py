from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    CustomBaseError,
    DomainError,
    NotFoundError,
    TransactionFailed,
    WalletNotConnected,
)
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_ledger_gateway import ILedgerGateway
from src.service.cinema.app.interface.i_wallet_signer import IWalletSigner, IWalletSignerProvider
from src.service.cinema.app.service.in_flight_guard import InFlightGuard
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.transaction_attempt import TransactionAttempt
from src.service.cinema.domain.enum.transaction_state import (
    ConfirmationPolicy,
    TransactionKind,
    TransactionState,
)


def showtime_target(showtime_id: int) -> str:
    return f'showtime:{showtime_id}'


def ticket_target(ticket_id: int) -> str:
    return f'ticket:{ticket_id}'


def validate_seat_selection(seat_ids: List[int], *, total_seats: int) -> List[int]:
    """Return the selection sorted; empty, duplicate or out-of-range seats are rejected."""
    if not seat_ids:
        raise DomainError('Select at least one seat')
    if len(set(seat_ids)) != len(seat_ids):
        raise DomainError('Each seat can only be selected once')
    out_of_range = [seat for seat in seat_ids if not 1 <= seat <= total_seats]
    if out_of_range:
        raise DomainError(f'Seats {out_of_range} do not exist (1-{total_seats})')
    return sorted(seat_ids)


class TransactionOrchestrator:
    """
    Drives ledger writes for one wallet.

    Purchases are fire-and-acknowledge: the attempt is done once the node
    accepted the transaction, and seat state is trusted only after the next
    read. Refunds wait for the receipt because the outcome is monetary.

    The wallet is checked before anything touches the network, and at most
    one attempt per showtime (buy) or ticket (refund) is in flight.
    """

    def __init__(
        self,
        *,
        ledger_gateway: ILedgerGateway,
        signer_provider: IWalletSignerProvider,
        in_flight_guard: InFlightGuard,
    ) -> None:
        self.ledger_gateway = ledger_gateway
        self.signer_provider = signer_provider
        self.in_flight_guard = in_flight_guard
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        ledger_gateway: ILedgerGateway = Depends(Provide[Container.ledger_gateway]),
        signer_provider: IWalletSignerProvider = Depends(
            Provide[Container.wallet_signer_provider]
        ),
        in_flight_guard: InFlightGuard = Depends(Provide[Container.in_flight_guard]),
    ) -> Self:
        return cls(
            ledger_gateway=ledger_gateway,
            signer_provider=signer_provider,
            in_flight_guard=in_flight_guard,
        )

    def _acquire_signer(self, attempt: TransactionAttempt) -> IWalletSigner:
        attempt.advance(TransactionState.ACQUIRING_SIGNER)
        signer = self.signer_provider.get_signer()
        if signer is None:
            attempt.fail('wallet not connected')
            Logger.base.warning(f'👛 [TX] {attempt.target}: no wallet connected')
            raise WalletNotConnected()
        return signer

    @Logger.io
    async def buy_seats(self, *, showtime_id: int, seat_ids: List[int]) -> TransactionAttempt:
        kind = TransactionKind.BUY_SEAT if len(seat_ids) == 1 else TransactionKind.BUY_SEATS
        attempt = TransactionAttempt(
            kind=kind,
            target=showtime_target(showtime_id),
            policy=ConfirmationPolicy.FIRE_AND_ACKNOWLEDGE,
        )
        signer = self._acquire_signer(attempt)

        with self.tracer.start_as_current_span(
            'use_case.buy_seats',
            attributes={'showtime.id': showtime_id, 'seat.count': len(seat_ids)},
        ):
            try:
                async with self.in_flight_guard.hold(attempt.target):
                    showtime = await self._load_showtime(showtime_id)
                    seats = validate_seat_selection(seat_ids, total_seats=showtime.total_seats)
                    attempt.value_wei = showtime.total_price_wei(len(seats))

                    attempt.advance(TransactionState.SUBMITTING)
                    Logger.base.info(
                        f'🎫 [TX] Buying seats {seats} of showtime {showtime_id} '
                        f'for {attempt.value_wei} wei from {signer.address}'
                    )
                    if kind is TransactionKind.BUY_SEAT:
                        attempt.tx_hash = await self.ledger_gateway.buy_seat(
                            signer=signer,
                            showtime_id=showtime_id,
                            seat_id=seats[0],
                            value_wei=attempt.value_wei,
                        )
                    else:
                        attempt.tx_hash = await self.ledger_gateway.buy_seats(
                            signer=signer,
                            showtime_id=showtime_id,
                            seat_ids=seats,
                            value_wei=attempt.value_wei,
                        )
                    attempt.advance(TransactionState.SUBMITTED)
            except CustomBaseError as e:
                attempt.fail(e.message)
                raise
            except Exception as e:
                attempt.fail(f'{type(e).__name__}: {e}')
                raise TransactionFailed() from e

        attempt.advance(TransactionState.DONE)
        Logger.base.info(f'📤 [TX] {attempt.target} submitted as {attempt.tx_hash}')
        return attempt

    @Logger.io
    async def refund_ticket(self, *, ticket_id: int) -> TransactionAttempt:
        attempt = TransactionAttempt(
            kind=TransactionKind.REFUND,
            target=ticket_target(ticket_id),
            policy=ConfirmationPolicy.WAIT_FOR_CONFIRMATION,
        )
        signer = self._acquire_signer(attempt)

        with self.tracer.start_as_current_span(
            'use_case.refund_ticket', attributes={'ticket.id': ticket_id}
        ):
            try:
                async with self.in_flight_guard.hold(attempt.target):
                    attempt.advance(TransactionState.SUBMITTING)
                    Logger.base.info(f'↩️ [TX] Refunding ticket {ticket_id} for {signer.address}')
                    attempt.tx_hash = await self.ledger_gateway.refund_ticket(
                        signer=signer, ticket_id=ticket_id
                    )
                    await self.ledger_gateway.wait_for_confirmation(attempt.tx_hash)
                    attempt.advance(TransactionState.CONFIRMED)
            except CustomBaseError as e:
                attempt.fail(e.message)
                raise
            except Exception as e:
                attempt.fail(f'{type(e).__name__}: {e}')
                raise TransactionFailed() from e

        attempt.advance(TransactionState.DONE)
        Logger.base.info(f'✅ [TX] Refund of ticket {ticket_id} confirmed in {attempt.tx_hash}')
        return attempt

    async def _load_showtime(self, showtime_id: int) -> Showtime:
        showtime = await self.ledger_gateway.showtime_by_id(showtime_id)
        if showtime is None:
            raise NotFoundError(f'Showtime {showtime_id} not found')
        return showtime
