"""
Seat Bitmap Codec

The ledger stores seat occupancy per showtime as an ordered list of uint256
words. Bit `b` of word `k` set means seat number `k * 256 + b + 1` is sold.

`seat_label` is the only seat-number-to-label formula in the codebase; the
seatmap, ticket list and QR payload all go through it.
"""

from collections.abc import Iterable
from string import ascii_uppercase


BITMAP_WIDTH = 256
_WORD_MASK = (1 << BITMAP_WIDTH) - 1


def decode(bitmaps: Iterable[int]) -> set[int]:
    """Return the set of taken seat numbers. Missing words count as all-zero."""
    taken: set[int] = set()
    for word_index, word in enumerate(bitmaps):
        bits = int(word) & _WORD_MASK
        while bits:
            lowest = bits & -bits
            bit_index = lowest.bit_length() - 1
            taken.add(word_index * BITMAP_WIDTH + bit_index + 1)
            bits ^= lowest
    return taken


def _row_letters(row_index: int) -> str:
    # A..Z, then AA, AB, ... so labels stay unique past 26 rows
    letters = ''
    row_index += 1
    while row_index:
        row_index, remainder = divmod(row_index - 1, len(ascii_uppercase))
        letters = ascii_uppercase[remainder] + letters
    return letters


def seat_label(seat_number: int, seats_per_row: int) -> str:
    """seat_label(1, 10) == 'A1', seat_label(10, 10) == 'A10', seat_label(11, 10) == 'B1'"""
    if seats_per_row < 1:
        raise ValueError(f'seats_per_row must be positive, got {seats_per_row}')
    if seat_number < 1:
        raise ValueError(f'seat number must be positive, got {seat_number}')

    row_index, column_index = divmod(seat_number - 1, seats_per_row)
    return f'{_row_letters(row_index)}{column_index + 1}'
