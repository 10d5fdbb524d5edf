# connect4/core/search.py
import logging
import math
from typing import Optional, Tuple

from .bitboard import Bitboard
from .constants import COLUMN_ORDER, SEARCH_DEPTH, WIN_SCORE, Player
from .evaluation import evaluate_distribution

logger = logging.getLogger(__name__)

SearchResult = Tuple[float, Optional[int]]


class Searcher:
    """
    Depth-limited minimax with alpha-beta pruning.
    Player A maximizes, player B minimizes.
    """

    def __init__(self):
        self.nodes = 0

    def solve(self, board: Bitboard, maximizing: bool, depth: int = SEARCH_DEPTH) -> dict:
        """
        Root Entry Point.
        Full window search; best_move is None when the board is already full or decided.
        """
        if depth < 0:
            raise ValueError(f"Search depth must be >= 0, got {depth}")
        self.nodes = 0
        score, move = self.minimax(board, maximizing, depth, -math.inf, math.inf)

        logger.debug(
            "search depth=%d maximizing=%s -> column=%s score=%s nodes=%d",
            depth, maximizing, move, score, self.nodes,
        )
        return {
            "best_move": move,
            "best_score": score,
            "nodes_explored": self.nodes,
        }

    def minimax(self, board: Bitboard, maximizing: bool, depth: int,
                alpha: float, beta: float) -> SearchResult:
        self.nodes += 1

        # 1. Leaf: horizon reached, someone won, or no room left
        winner = board.winner()
        if depth == 0 or winner is not None or board.is_full():
            sign = int(winner) if winner is not None else 0
            # Faster wins and slower losses score better for the side that benefits
            adjustment = depth if maximizing else -depth
            return sign * WIN_SCORE + evaluate_distribution(board) - adjustment, None

        mover = Player.A if maximizing else Player.B
        best_move = None

        # 2. Recursive Search, each move on its own copy
        if maximizing:
            best_score = -math.inf
            for col in COLUMN_ORDER:
                if board.top_row(col) is None:
                    continue
                child = board.copy(turn=mover)
                child.place(col)
                score, _ = self.minimax(child, False, depth - 1, alpha, beta)

                if best_score < score:
                    best_score = score
                    best_move = col

                alpha = max(alpha, best_score)
                if beta <= alpha:
                    break  # Beta Cutoff
        else:
            best_score = math.inf
            for col in COLUMN_ORDER:
                if board.top_row(col) is None:
                    continue
                child = board.copy(turn=mover)
                child.place(col)
                score, _ = self.minimax(child, True, depth - 1, alpha, beta)

                if best_score > score:
                    best_score = score
                    best_move = col

                beta = min(beta, best_score)
                if beta <= alpha:
                    break  # Alpha Cutoff

        return best_score, best_move


def search(board: Bitboard, maximizing: bool, depth: int = SEARCH_DEPTH,
           alpha: float = -math.inf, beta: float = math.inf) -> SearchResult:
    """
    Returns (evaluation, column). Column is None when there is nothing to play,
    callers must check before placing.
    """
    if depth < 0:
        raise ValueError(f"Search depth must be >= 0, got {depth}")
    return Searcher().minimax(board, maximizing, depth, alpha, beta)
