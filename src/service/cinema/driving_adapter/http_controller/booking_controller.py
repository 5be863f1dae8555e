from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.transaction_orchestrator import TransactionOrchestrator
from src.service.cinema.domain.entity.transaction_attempt import TransactionAttempt
from src.service.cinema.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    TransactionResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _to_response(attempt: TransactionAttempt) -> TransactionResponse:
    return TransactionResponse(
        kind=attempt.kind.value,
        target=attempt.target,
        state=attempt.state.value,
        tx_hash=attempt.tx_hash,
        value_wei=str(attempt.value_wei),
    )


@router.post('', status_code=status.HTTP_202_ACCEPTED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    orchestrator: TransactionOrchestrator = Depends(TransactionOrchestrator.depends),
) -> TransactionResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('showtime_id', request.showtime_id)
        # Accepted by the network, not yet mined: seat state settles on the next read
        attempt = await orchestrator.buy_seats(
            showtime_id=request.showtime_id, seat_ids=request.seat_ids
        )
        return _to_response(attempt)


@router.post('/refund/{ticket_id}')
@Logger.io
async def refund_ticket(
    ticket_id: int,
    orchestrator: TransactionOrchestrator = Depends(TransactionOrchestrator.depends),
) -> TransactionResponse:
    attempt = await orchestrator.refund_ticket(ticket_id=ticket_id)
    return _to_response(attempt)
