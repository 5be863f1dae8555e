import time
from typing import List, Optional, Self
from zoneinfo import ZoneInfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.concurrency.fan_out import fan_out
from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, GatewayUnavailable, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.ticket_view import QrPayload, TicketView
from src.service.cinema.app.interface.i_ledger_gateway import ILedgerGateway
from src.service.cinema.app.service.identity_reconciler import IdentityReconciler
from src.service.cinema.app.service.pending_scan_registry import PendingScanRegistry
from src.service.cinema.domain.entity.movie_entity import CatalogMovie, OnChainMovie
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.ticket_entity import Ticket
from src.service.cinema.domain.enum.ticket_status import TicketStatus
from src.service.cinema.domain.seat_bitmap_codec import seat_label
from src.service.cinema.domain.showtime_schedule import format_date, format_time, to_local


class ListMyTicketsUseCase:
    """
    Ticket ownership read model.

    The ledger only answers "which ticket ids does this address own", so each
    ticket is completed with its showtime, its movie and the movie's catalog
    poster. Tickets are resolved concurrently and returned newest first.
    """

    def __init__(
        self,
        *,
        ledger_gateway: ILedgerGateway,
        identity_reconciler: IdentityReconciler,
        pending_scan_registry: PendingScanRegistry,
        seats_per_row: int = settings.SEATS_PER_ROW,
        timezone: str = settings.DISPLAY_TIMEZONE,
        fan_out_limit: int = settings.LEDGER_FAN_OUT_LIMIT,
    ) -> None:
        self.ledger_gateway = ledger_gateway
        self.identity_reconciler = identity_reconciler
        self.pending_scan_registry = pending_scan_registry
        self.seats_per_row = seats_per_row
        self.tz = ZoneInfo(timezone)
        self.fan_out_limit = fan_out_limit
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        ledger_gateway: ILedgerGateway = Depends(Provide[Container.ledger_gateway]),
        identity_reconciler: IdentityReconciler = Depends(
            Provide[Container.identity_reconciler]
        ),
        pending_scan_registry: PendingScanRegistry = Depends(
            Provide[Container.pending_scan_registry]
        ),
    ) -> Self:
        return cls(
            ledger_gateway=ledger_gateway,
            identity_reconciler=identity_reconciler,
            pending_scan_registry=pending_scan_registry,
        )

    @Logger.io
    async def list_for_owner(self, owner: str) -> List[TicketView]:
        owner = owner.strip()
        if not owner:
            return []

        with self.tracer.start_as_current_span(
            'use_case.list_my_tickets', attributes={'owner': owner}
        ):
            ticket_ids = await self.ledger_gateway.ticket_ids_by_owner(owner)
            now = time.time()
            views = await fan_out(
                lambda ticket_id: self._build_view(ticket_id, now=now),
                ticket_ids,
                limit=self.fan_out_limit,
            )

        views.sort(key=lambda view: view.ticket_id, reverse=True)
        Logger.base.info(f'🎟️ [TICKETS] {owner} owns {len(views)} tickets')
        return views

    async def _build_view(self, ticket_id: int, *, now: float) -> TicketView:
        ticket = await self.ledger_gateway.ticket_by_id(ticket_id)

        # Only the ticket itself is essential; its showtime and movie degrade to blanks
        showtime: Optional[Showtime] = None
        movie: Optional[OnChainMovie] = None
        catalog: Optional[CatalogMovie] = None
        try:
            showtime = await self.ledger_gateway.showtime_by_id(ticket.showtime_id)
            if showtime is not None:
                movie = await self.ledger_gateway.movie_by_id(showtime.movie_id)
        except GatewayUnavailable as e:
            Logger.base.warning(
                f'⚠️ [TICKETS] Ticket {ticket.id} shown without showtime details: {e.message}'
            )
        if movie is not None:
            catalog = await self.identity_reconciler.resolve_catalog(movie.title)

        return self._to_view(ticket, showtime, movie, catalog, now=now)

    def _to_view(
        self,
        ticket: Ticket,
        showtime: Optional[Showtime],
        movie: Optional[OnChainMovie],
        catalog: Optional[CatalogMovie],
        *,
        now: float,
    ) -> TicketView:
        start_time = showtime.start_time if showtime is not None else 0
        if start_time:
            local_start = to_local(start_time, self.tz)
            date, time_string = format_date(local_start), format_time(local_start)
        else:
            date, time_string = '', ''

        return TicketView(
            ticket_id=ticket.id,
            showtime_id=ticket.showtime_id,
            seat_id=ticket.seat_id,
            seat=seat_label(ticket.seat_id, self.seats_per_row),
            owner=ticket.owner,
            status=self.pending_scan_registry.overlay(ticket.id, ticket.status),
            movie_title=movie.title if movie is not None else '',
            poster_url=catalog.poster_url if catalog is not None else None,
            start_time=start_time,
            date=date,
            time=time_string,
            is_upcoming=start_time > now,
        )

    @Logger.io
    async def build_qr_payload(self, ticket_id: int, owner: str) -> QrPayload:
        """Redemption payload of an active ticket; showing it marks the ticket pending scan."""
        ticket = await self.ledger_gateway.ticket_by_id(ticket_id)
        if not ticket.id or ticket.owner.lower() != owner.strip().lower():
            raise NotFoundError(f'Ticket {ticket_id} not found for {owner}')
        if ticket.status is not TicketStatus.ACTIVE:
            raise DomainError(f'Ticket {ticket_id} is {ticket.status.value} and cannot be redeemed')

        self.pending_scan_registry.mark(ticket.id)
        Logger.base.info(f'📱 [TICKETS] QR shown for ticket {ticket.id}, marked pending scan')
        return QrPayload(
            ticket_id=ticket.id,
            seat=seat_label(ticket.seat_id, self.seats_per_row),
            owner=ticket.owner,
        )
