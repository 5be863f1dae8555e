"""Cinema contract ABI (only the functions this service calls)."""

from typing import Any


def _uint(name: str) -> dict[str, str]:
    return {'name': name, 'type': 'uint256'}


def _view(name: str, inputs: list[dict[str, str]], outputs: list[dict[str, str]]) -> dict[str, Any]:
    return {
        'type': 'function',
        'name': name,
        'stateMutability': 'view',
        'inputs': inputs,
        'outputs': outputs,
    }


def _write(name: str, inputs: list[dict[str, str]], *, payable: bool) -> dict[str, Any]:
    return {
        'type': 'function',
        'name': name,
        'stateMutability': 'payable' if payable else 'nonpayable',
        'inputs': inputs,
        'outputs': [],
    }


CINEMA_CONTRACT_ABI: list[dict[str, Any]] = [
    _view('getNextMovieId', [], [_uint('')]),
    _view(
        'movies',
        [_uint('')],
        [_uint('id'), {'name': 'title', 'type': 'string'}, {'name': 'isActive', 'type': 'bool'}],
    ),
    _view('getNextShowtimeId', [], [_uint('')]),
    _view(
        'getShowtimeDetails',
        [_uint('_showtimeId')],
        [
            _uint('id'),
            _uint('movieId'),
            _uint('theaterId'),
            _uint('startTime'),
            _uint('ticketPrice'),
            _uint('totalSeats'),
            _uint('seatsSold'),
        ],
    ),
    _view('getSeatsBitmap', [_uint('_showtimeId')], [{'name': '', 'type': 'uint256[]'}]),
    _view(
        'getTicketsByOwner',
        [{'name': '_owner', 'type': 'address'}],
        [{'name': '', 'type': 'uint256[]'}],
    ),
    _view(
        'tickets',
        [_uint('')],
        [
            _uint('id'),
            _uint('showtimeId'),
            _uint('seatId'),
            {'name': 'owner', 'type': 'address'},
            {'name': 'status', 'type': 'uint8'},
        ],
    ),
    _write('buyTicket', [_uint('_showtimeId'), _uint('_seatId')], payable=True),
    _write(
        'buyMultipleTickets',
        [_uint('_showtimeId'), {'name': '_seatIds', 'type': 'uint256[]'}],
        payable=True,
    ),
    _write('refundTicket', [_uint('_ticketId')], payable=False),
]
