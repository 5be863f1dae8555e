"""Application layer DTOs"""

from src.service.cinema.app.dto.seatmap import Seatmap
from src.service.cinema.app.dto.ticket_view import QrPayload, TicketView

__all__ = ['QrPayload', 'Seatmap', 'TicketView']
