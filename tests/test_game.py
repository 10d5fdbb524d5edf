import unittest

from connect4.app.enums import GameStatus, PlayerType
from connect4.app.events import GameEvents
from connect4.app.game import GameSession
from connect4.core.bitboard import Bitboard
from connect4.core.constants import COLS, ROWS, ROW_STRIDE, Player
from connect4.core.errors import InvalidMove, InvalidColumnIndex, NoLegalMove


def almost_drawn_board() -> Bitboard:
    """Draw pattern missing its top-left cell (a B disc), B to move."""
    pattern = [0, 0, 1, 1, 0, 0, 1]
    a = b = 0
    for r in range(ROWS):
        for c in range(COLS):
            bit = 1 << (r * ROW_STRIDE + c)
            if pattern[c] ^ (r % 2):
                b |= bit
            else:
                a |= bit
    b &= ~(1 << (5 * ROW_STRIDE))
    return Bitboard(a, b, Player.B)


class TestTwoPlayerSession(unittest.TestCase):
    def setUp(self):
        self.session = GameSession(play_against_cpu=False)

    def test_new_session_state(self):
        self.assertEqual(self.session.status, GameStatus.IN_PROGRESS)
        self.assertIs(self.session.current_turn, Player.A)
        self.assertEqual(self.session.get_valid_moves(), list(range(COLS)))
        self.assertEqual(self.session.history, [])
        self.assertEqual(self.session.top_row(4), 0)

    def test_drop_piece_records_and_alternates(self):
        first = self.session.drop_piece(3)
        second = self.session.drop_piece(3)

        self.assertEqual((first.player, first.column, first.row), (1, 3, 0))
        self.assertEqual((second.player, second.column, second.row), (-1, 3, 1))
        self.assertIs(self.session.current_turn, Player.A)
        self.assertEqual(len(self.session.history), 2)
        self.assertEqual(self.session.top_row(3), 2)

    def test_win_completes_round_and_scores(self):
        completed = []
        self.session.events.subscribe_complete(lambda s, w: completed.append(w))

        for col in (0, 0, 1, 1, 2, 2):
            self.session.drop_piece(col)
        self.assertTrue(self.session.is_running)
        self.session.drop_piece(3)

        self.assertEqual(self.session.status, GameStatus.COMPLETED)
        self.assertIs(self.session.winner, Player.A)
        self.assertEqual(completed, [Player.A])
        score = self.session.scoreboard.snapshot()
        self.assertEqual((score.player_a, score.player_b, score.draws), (1, 0, 0))

        with self.assertRaises(InvalidMove):
            self.session.drop_piece(4)
        self.assertEqual(len(self.session.history), 7)

    def test_draw_is_detected(self):
        self.session.board = almost_drawn_board()
        self.session.drop_piece(0)

        self.assertTrue(self.session.is_draw())
        self.assertIsNone(self.session.winner)
        self.assertEqual(self.session.scoreboard.snapshot().draws, 1)

    def test_rejected_moves_leave_session_untouched(self):
        for _ in range(ROWS):
            self.session.drop_piece(0)
        turn = self.session.current_turn

        with self.assertRaises(InvalidMove):
            self.session.drop_piece(0)
        with self.assertRaises(InvalidColumnIndex):
            self.session.drop_piece(9)

        self.assertIs(self.session.current_turn, turn)
        self.assertEqual(len(self.session.history), ROWS)

    def test_new_round_keeps_score(self):
        for col in (0, 0, 1, 1, 2, 2, 3):
            self.session.drop_piece(col)
        self.session.new_round(play_against_cpu=True)

        self.assertTrue(self.session.play_against_cpu)
        self.assertEqual(self.session.status, GameStatus.IN_PROGRESS)
        self.assertEqual(self.session.history, [])
        self.assertEqual(self.session.scoreboard.snapshot().player_a, 1)

    def test_failing_listener_does_not_break_round(self):
        def broken(session, winner):
            raise RuntimeError("boom")

        events = GameEvents()
        events.subscribe_complete(broken)
        session = GameSession(play_against_cpu=False, events=events)
        for col in (0, 0, 1, 1, 2, 2, 3):
            session.drop_piece(col)

        self.assertEqual(session.status, GameStatus.COMPLETED)
        self.assertEqual(session.scoreboard.snapshot().player_a, 1)

    def test_shared_hub_scores_each_session_separately(self):
        """
        Two sessions on one hub: a round won in the first one
        must not show up on the second one's scoreboard.
        """
        events = GameEvents()
        first = GameSession(play_against_cpu=False, events=events)
        second = GameSession(play_against_cpu=False, events=events)
        for col in (0, 0, 1, 1, 2, 2, 3):
            first.drop_piece(col)

        score = first.scoreboard.snapshot()
        self.assertEqual((score.player_a, score.player_b, score.draws), (1, 0, 0))
        score = second.scoreboard.snapshot()
        self.assertEqual((score.player_a, score.player_b, score.draws), (0, 0, 0))

    def test_close_detaches_from_hub(self):
        events = GameEvents()
        completed = []
        events.subscribe_complete(lambda s, w: completed.append(w))
        session = GameSession(play_against_cpu=False, events=events)
        self.assertEqual(len(events._on_complete_listeners), 2)

        session.close()
        self.assertEqual(len(events._on_complete_listeners), 1)

        for col in (0, 0, 1, 1, 2, 2, 3):
            session.drop_piece(col)
        # Other listeners still hear about the round, the closed session no longer counts it
        self.assertEqual(completed, [Player.A])
        self.assertEqual(session.scoreboard.snapshot().player_a, 0)

    def test_unknown_move_metadata_is_dropped(self):
        record = self.session.drop_piece(3, note="opening")

        self.assertNotIn("note", record.model_dump())
        self.assertEqual(record.column, 3)

    def test_text_renderings(self):
        self.session.drop_piece(3)
        self.session.drop_piece(3)

        lines = self.session.get_visual_board().splitlines()
        self.assertEqual(lines[0], " 0 1 2 3 4 5 6")
        self.assertEqual(lines[-1], "|.|.|.|X|.|.|.|")
        self.assertEqual(lines[-2], "|.|.|.|O|.|.|.|")
        self.assertIn("Column 3: A, B", self.session.get_textual_description())
        self.assertIn("Column 0: Empty", self.session.get_textual_description())


class TestCpuSession(unittest.TestCase):
    def setUp(self):
        self.session = GameSession(play_against_cpu=True, cpu_depth=2)

    def test_play_turn_gets_cpu_reply(self):
        records = self.session.play_turn(3)

        self.assertEqual(len(records), 2)
        human, cpu = records
        self.assertEqual(human.player_type, PlayerType.HUMAN)
        self.assertEqual(cpu.player_type, PlayerType.CPU)
        self.assertEqual(cpu.player, int(Player.B))
        self.assertGreater(cpu.nodes, 0)
        self.assertIsNotNone(cpu.evaluation)
        self.assertIs(self.session.current_turn, Player.A)

    def test_cpu_blocks_open_three(self):
        for col in (0, 1, 2):
            self.session.drop_piece(col)
            if col != 2:
                self.session.drop_piece(col)
        # A: row 0 columns 0-2, B: row 1 columns 0-1, B to move
        record = self.session.play_cpu_move()
        self.assertEqual(record.column, 3)

    def test_play_turn_rejects_out_of_turn_input(self):
        self.session.drop_piece(3)
        with self.assertRaises(InvalidMove):
            self.session.play_turn(3)

    def test_cpu_on_finished_round_raises(self):
        for col in (0, 0, 1, 1, 2, 2, 3):
            self.session.drop_piece(col)
        with self.assertRaises(NoLegalMove):
            self.session.play_cpu_move()

    def test_cpu_does_not_reply_after_winning_move(self):
        for col in (0, 0, 1, 1, 2, 2):
            self.session.drop_piece(col)
        records = self.session.play_turn(3)
        self.assertEqual(len(records), 1)
        self.assertIs(self.session.winner, Player.A)


if __name__ == '__main__':
    unittest.main()
