from typing import List

from fastapi import APIRouter, Depends, Query

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.list_my_tickets_use_case import ListMyTicketsUseCase
from src.service.cinema.driving_adapter.http_controller.schema.ticket_schema import (
    QrPayloadResponse,
    TicketResponse,
)


router = APIRouter()


@router.get('/owner/{address}')
@Logger.io
async def list_my_tickets(
    address: str,
    use_case: ListMyTicketsUseCase = Depends(ListMyTicketsUseCase.depends),
) -> List[TicketResponse]:
    views = await use_case.list_for_owner(address)
    return [TicketResponse.model_validate(view) for view in views]


@router.get('/{ticket_id}/qr')
@Logger.io
async def get_ticket_qr(
    ticket_id: int,
    owner: str = Query(min_length=1),
    use_case: ListMyTicketsUseCase = Depends(ListMyTicketsUseCase.depends),
) -> QrPayloadResponse:
    payload = await use_case.build_qr_payload(ticket_id, owner)
    return QrPayloadResponse(**payload.to_dict())
