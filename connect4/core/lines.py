# connect4/core/lines.py
"""
Catalog of every 4-in-a-row mask on the 7x6 board.

Masks use the row-major packing from constants.py (stride 7 between rows),
so a vertical line is spaced by 7, a rising diagonal by 8 and a falling
diagonal by 6.
"""
from typing import FrozenSet

from .constants import ROWS, COLS, ROW_STRIDE

# Base patterns anchored at bit 0
VERTICAL = 0x204081       # bits 0, 7, 14, 21
HORIZONTAL = 0xF          # bits 0, 1, 2, 3
DIAGONAL_UP = 0x1010101   # bits 0, 8, 16, 24
DIAGONAL_DOWN = 0x208208  # bits 3, 9, 15, 21


def generate_lines() -> FrozenSet[int]:
    masks = set()

    # Vertical: 3 start rows x 7 columns = 21 contiguous offsets
    for offset in range((ROWS - 3) * ROW_STRIDE):
        masks.add(VERTICAL << offset)

    # Horizontal: 6 rows x 4 start columns
    for row in range(ROWS):
        for col in range(COLS - 3):
            masks.add(HORIZONTAL << (col + row * ROW_STRIDE))

    # Diagonals: 3 row bands x 4 start columns each
    for row in range(ROWS - 3):
        for col in range(COLS - 3):
            masks.add(DIAGONAL_UP << (col + row * ROW_STRIDE))
            masks.add(DIAGONAL_DOWN << (col + row * ROW_STRIDE))

    return frozenset(masks)


LINES = generate_lines()
