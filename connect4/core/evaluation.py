# connect4/core/evaluation.py
from .bitboard import Bitboard
from .constants import DISTRIBUTION_WEIGHTS


def _weighted_sum(bits: int) -> int:
    total = 0
    while bits:
        low = bits & -bits
        total += DISTRIBUTION_WEIGHTS[low.bit_length() - 1]
        bits ^= low
    return total


def evaluate_distribution(board: Bitboard) -> int:
    """
    Static score of the disc layout: weights of A's cells minus weights of B's.
    Positive favours player A. Only used as a tie-breaker below the search horizon.
    """
    return _weighted_sum(board.player_a) - _weighted_sum(board.player_b)
