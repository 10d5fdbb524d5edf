# connect4/core/constants.py
from enum import IntEnum

# --- Board Dimensions ---
ROWS = 6
COLS = 7
# Row-major packing: bit index = row * ROW_STRIDE + col, row 0 is the BOTTOM
ROW_STRIDE = COLS
CELLS = ROWS * COLS
# Every playable cell set. Anything above bit 41 is off the board.
FULL_MASK = (1 << CELLS) - 1


class Player(IntEnum):
    """Value doubles as the winner sign used by the search."""
    A = 1
    B = -1

    @property
    def opponent(self) -> "Player":
        return Player.B if self is Player.A else Player.A


# --- Scoring System ---
# Terminal score = winner_sign * WIN_SCORE + distribution - depth adjustment
WIN_SCORE = 100

# Cell weights for the positional heuristic, one row per board row.
# Central columns count most, uniform across rows.
DISTRIBUTION_WEIGHTS = (
    10, 15, 20, 22, 20, 15, 10,
    10, 15, 20, 22, 20, 15, 10,
    10, 15, 20, 22, 20, 15, 10,
    10, 15, 20, 22, 20, 15, 10,
    10, 15, 20, 22, 20, 15, 10,
    10, 15, 20, 22, 20, 15, 10,
)

# --- Search ---
# Fixed horizon used for every machine move
SEARCH_DEPTH = 6

# Highest column first. Ties keep the first column found in this order.
COLUMN_ORDER = (6, 5, 4, 3, 2, 1, 0)
