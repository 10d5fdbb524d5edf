import logging
import time
from typing import Dict, List, Optional

from connect4.app.enums import GameStatus, PlayerType
from connect4.app.events import GameEvents
from connect4.app.schemas import MoveRecord, ScoreSnapshot
from connect4.core.bitboard import Bitboard, new_board
from connect4.core.constants import ROWS, COLS, SEARCH_DEPTH, Player
from connect4.core.errors import GameError, InvalidMove, NoLegalMove
from connect4.core.search import Searcher

# Logger setup
logger = logging.getLogger(__name__)

# In CPU mode the human always opens and the machine answers as player B
HUMAN_PLAYER = Player.A
CPU_PLAYER = Player.B


class Scoreboard:
    """Tally of finished rounds of one session."""

    def __init__(self):
        self.player_a = 0
        self.player_b = 0
        self.draws = 0

    def record(self, winner: Optional[Player]):
        if winner is Player.A:
            self.player_a += 1
        elif winner is Player.B:
            self.player_b += 1
        else:
            self.draws += 1

    def snapshot(self) -> ScoreSnapshot:
        return ScoreSnapshot(player_a=self.player_a, player_b=self.player_b, draws=self.draws)


class GameSession:
    def __init__(self, play_against_cpu: bool = True, cpu_depth: int = SEARCH_DEPTH,
                 events: Optional[GameEvents] = None, symbols: Optional[Dict[Player, str]] = None):
        """
        Owns the authoritative board of the current round plus everything that
        outlives a round (mode, score). Row 0 of the board is the BOTTOM.
        """
        self.cpu_depth = cpu_depth
        self.symbols = {Player.A: "X", Player.B: "O"}
        if symbols:
            self.symbols.update(symbols)

        self.events = events or GameEvents()
        self.scoreboard = Scoreboard()
        self.events.subscribe_complete(self._on_round_complete)

        self.play_against_cpu = play_against_cpu
        self.new_round()

    def new_round(self, play_against_cpu: Optional[bool] = None):
        """Fresh board with player A to move. Score is kept."""
        if play_against_cpu is not None:
            self.play_against_cpu = play_against_cpu
        self.board: Bitboard = new_board()
        self.winner: Optional[Player] = None
        self.status = GameStatus.IN_PROGRESS
        self.history: List[MoveRecord] = []
        logger.info("New round (vs cpu: %s)", self.play_against_cpu)

    def close(self):
        """Detach from the event hub, which may be shared with other sessions."""
        self.events.unsubscribe_complete(self._on_round_complete)

    def _on_round_complete(self, session, winner: Optional[Player]):
        # The hub may serve several sessions, only our own rounds count
        if session is self:
            self.scoreboard.record(winner)

    @property
    def current_turn(self) -> Player:
        return self.board.turn

    @property
    def is_running(self) -> bool:
        return self.status == GameStatus.IN_PROGRESS

    def get_valid_moves(self) -> List[int]:
        """Returns a list of column indices (0-6) that are not full."""
        return self.board.legal_moves()

    def is_draw(self) -> bool:
        return self.status == GameStatus.DRAW

    def top_row(self, col: int) -> Optional[int]:
        """Where a disc dropped in this column would land (for hover highlighting)."""
        return self.board.top_row(col)

    def drop_piece(self, col: int, player_type: PlayerType = PlayerType.HUMAN, **metadata) -> MoveRecord:
        """
        Drops a piece for the side to move, swaps the turn and settles the round.
        Raises InvalidMove / InvalidColumnIndex and leaves the session untouched on failure.
        """
        mover = self.board.turn
        try:
            if not self.is_running:
                raise InvalidMove(col, "round is over")
            row = self.board.place(col)
        except GameError as e:
            logger.warning("Rejected move from %s: %s", mover.name, e)
            raise

        record = MoveRecord(player=int(mover), column=col, row=row, player_type=player_type, **metadata)
        self.history.append(record)
        self.board.switch_turn()
        self._settle()
        return record

    def play_cpu_move(self) -> MoveRecord:
        """Search the current position and play the chosen column for the side to move."""
        start_time = time.time()
        maximizing = self.board.turn is Player.A

        solver = Searcher()
        result = solver.solve(self.board.copy(), maximizing, self.cpu_depth)
        col = result["best_move"]
        if col is None:
            raise NoLegalMove("No legal move for the CPU: board is full or already decided")

        duration = round(time.time() - start_time, 3)
        return self.drop_piece(
            col,
            player_type=PlayerType.CPU,
            evaluation=result["best_score"],
            nodes=result["nodes_explored"],
            duration=duration,
        )

    def play_turn(self, col: int) -> List[MoveRecord]:
        """
        One human input: the human move and, against the CPU, its reply.
        """
        if self.play_against_cpu and self.board.turn is not HUMAN_PLAYER:
            raise InvalidMove(col, "not the human player's turn")

        records = [self.drop_piece(col)]
        if self.play_against_cpu and self.is_running:
            records.append(self.play_cpu_move())
        return records

    def _settle(self):
        winner = self.board.winner()
        if winner is not None:
            self.winner = winner
            self.status = GameStatus.COMPLETED
            logger.info("Round won by player %s after %d moves", winner.name, len(self.history))
        elif self.board.is_full():
            self.status = GameStatus.DRAW
            logger.info("Round drawn")
        else:
            return
        self.events.notify_complete(self, self.winner)

    # --- Text rendering ---

    def get_visual_board(self) -> str:
        """Generates an ASCII grid, top row first."""
        header = " " + " ".join([str(i) for i in range(COLS)])
        rows_str = []
        for r in range(ROWS - 1, -1, -1):
            row_cells = [self.symbols.get(self.board.cell(r, c), ".") for c in range(COLS)]
            rows_str.append("|" + "|".join(row_cells) + "|")
        return header + "\n" + "\n".join(rows_str)

    def get_textual_description(self) -> str:
        """
        Describes the board column by column, listing pieces from Bottom to Top.
        Example: 'Column 0: A, B'
        """
        lines = []
        for c in range(COLS):
            pieces = []
            for r in range(ROWS):
                owner = self.board.cell(r, c)
                if owner is None:
                    break
                pieces.append(owner.name)

            desc = ", ".join(pieces) if pieces else "Empty"
            lines.append(f"Column {c}: {desc}")
        return "\n".join(lines)
