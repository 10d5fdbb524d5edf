# connect4/core/bitboard.py
from typing import List, Optional

from .constants import ROWS, COLS, ROW_STRIDE, FULL_MASK, Player
from .errors import InvalidMove, InvalidColumnIndex
from .lines import LINES


def _check_column(col: int) -> None:
    if not isinstance(col, int) or not 0 <= col < COLS:
        raise InvalidColumnIndex(col)


class Bitboard:
    """
    One mask per player plus the side to move.
    Bit (row * 7 + col) is set when that cell holds a disc; row 0 is the bottom.
    """

    __slots__ = ("player_a", "player_b", "turn")

    def __init__(self, player_a: int = 0, player_b: int = 0, turn: Player = Player.A):
        self.player_a = player_a
        self.player_b = player_b
        self.turn = turn

    @classmethod
    def from_matrix(cls, matrix: List[List[int]]):
        """
        Converts a 2D matrix (Row 0=Top, values 0/1/2) to a Bitboard (Row 0=Bottom).
        Player A moves when both sides have the same number of discs.
        """
        if len(matrix) != ROWS or any(len(r) != COLS for r in matrix):
            raise ValueError(f"Matrix must be {ROWS}x{COLS}")

        player_a = 0
        player_b = 0
        for c in range(COLS):
            seen_empty = False
            for r in range(ROWS - 1, -1, -1):
                val = matrix[r][c]
                if val == 0:
                    seen_empty = True
                    continue
                if seen_empty:
                    raise ValueError(f"Floating disc in column {c}")
                bit = 1 << (((ROWS - 1) - r) * ROW_STRIDE + c)
                if val == 1:
                    player_a |= bit
                elif val == 2:
                    player_b |= bit
                else:
                    raise ValueError(f"Unknown cell value {val!r}")

        count_a = bin(player_a).count("1")
        count_b = bin(player_b).count("1")
        turn = Player.A if count_a == count_b else Player.B
        return cls(player_a, player_b, turn)

    def copy(self, turn: Optional[Player] = None) -> "Bitboard":
        return Bitboard(self.player_a, self.player_b, self.turn if turn is None else turn)

    @property
    def occupied(self) -> int:
        return self.player_a | self.player_b

    @property
    def moves_count(self) -> int:
        return bin(self.occupied).count("1")

    def winner(self) -> Optional[Player]:
        """Player A is checked first."""
        a = self.player_a
        for line in LINES:
            if a & line == line:
                return Player.A
        b = self.player_b
        for line in LINES:
            if b & line == line:
                return Player.B
        return None

    def is_full(self) -> bool:
        return self.occupied == FULL_MASK

    def top_row(self, col: int) -> Optional[int]:
        """Lowest free row of the column, or None when it is full."""
        _check_column(col)
        occupied = self.occupied
        mask = 1 << col
        for row in range(ROWS):
            if not occupied & mask:
                return row
            mask <<= ROW_STRIDE
        return None

    def can_play(self, col: int) -> bool:
        return self.top_row(col) is not None

    def legal_moves(self) -> List[int]:
        return [c for c in range(COLS) if self.can_play(c)]

    def place(self, col: int) -> int:
        """
        Drops a disc for the side to move and returns the row it landed on.
        Does NOT swap the turn; call switch_turn() once the move is confirmed.
        """
        row = self.top_row(col)
        if row is None:
            raise InvalidMove(col)

        bit = 1 << (row * ROW_STRIDE + col)
        if self.turn is Player.A:
            self.player_a |= bit
        else:
            self.player_b |= bit
        return row

    def switch_turn(self) -> None:
        self.turn = self.turn.opponent

    def cell(self, row: int, col: int) -> Optional[Player]:
        bit = 1 << (row * ROW_STRIDE + col)
        if self.player_a & bit:
            return Player.A
        if self.player_b & bit:
            return Player.B
        return None

    def __eq__(self, other):
        if not isinstance(other, Bitboard):
            return NotImplemented
        return (self.player_a, self.player_b, self.turn) == (other.player_a, other.player_b, other.turn)

    def __repr__(self):
        return f"Bitboard(player_a={self.player_a:#x}, player_b={self.player_b:#x}, turn={self.turn.name})"


def new_board() -> Bitboard:
    """Empty board with player A to move."""
    return Bitboard()
