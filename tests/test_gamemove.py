from unittest import TestCase, main

import numpy as np

from game2048.core.gamemove import (
    Direction,
    has_moves_remaining,
    illegal_actions,
    is_done,
    legal_actions,
    moves_board,
    parse_direction,
)

# ##>: Full board without any adjacent pair.
BLOCKED = np.array([[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4], [8, 16, 32, 64]])


class TestGameMove(TestCase):
    def test_illegal_actions(self):
        """
        Test if illegal actions are correctly identified.
        """
        board = np.array([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        illegal = illegal_actions(board)
        self.assertEqual(set(illegal), {Direction.LEFT})

    def test_legal_actions(self):
        """
        Test if legal actions are correctly identified.
        """
        board = np.array([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        legal = legal_actions(board)
        self.assertEqual(set(legal), {Direction.UP, Direction.RIGHT, Direction.DOWN})

    def test_moves_board(self):
        """
        A single tile in the top-left corner can only move right or down.
        """
        board = np.zeros((4, 4), dtype=np.int64)
        board[0, 0] = 2
        self.assertFalse(moves_board(board, Direction.LEFT))
        self.assertFalse(moves_board(board, Direction.UP))
        self.assertTrue(moves_board(board, Direction.RIGHT))
        self.assertTrue(moves_board(board, Direction.DOWN))

    def test_blocked_board(self):
        """
        No direction is legal on a blocked board.
        """
        self.assertEqual(legal_actions(BLOCKED), [])
        self.assertEqual(set(illegal_actions(BLOCKED)), set(Direction))

    def test_legality_agrees_with_terminal_check(self):
        """
        Legal and illegal directions partition the four directions, and moves remain iff one is legal.
        """
        generator = np.random.default_rng(17)
        for _ in range(300):
            board = np.zeros((4, 4), dtype=np.int64)
            num_tiles = generator.integers(1, 17)
            indices = generator.choice(16, size=num_tiles, replace=False)
            board.flat[indices] = generator.choice([2, 4, 8], size=num_tiles)

            legal = legal_actions(board)
            self.assertEqual(set(legal) | set(illegal_actions(board)), set(Direction))
            self.assertFalse(set(legal) & set(illegal_actions(board)))

            # ##>: With at least one tile, moves remain iff some direction is legal.
            self.assertEqual(has_moves_remaining(board), bool(legal))


class TestTerminal(TestCase):
    def test_blocked_board_is_done(self):
        """
        A full board without adjacent equal tiles has no moves remaining.
        """
        self.assertFalse(has_moves_remaining(BLOCKED))
        self.assertTrue(is_done(BLOCKED))

    def test_empty_cell_leaves_moves(self):
        board = BLOCKED.copy()
        board[3, 3] = 0
        self.assertTrue(has_moves_remaining(board))

    def test_horizontal_pair_leaves_moves(self):
        board = BLOCKED.copy()
        board[0, 1] = 2
        self.assertTrue(has_moves_remaining(board))

    def test_vertical_pair_leaves_moves(self):
        board = BLOCKED.copy()
        board[1, 3] = 16
        self.assertTrue(has_moves_remaining(board))
        self.assertFalse(is_done(board))


class TestParseDirection(TestCase):
    def test_direction_passthrough(self):
        self.assertIs(parse_direction(Direction.UP), Direction.UP)

    def test_integers(self):
        self.assertEqual(parse_direction(2), Direction.RIGHT)
        self.assertEqual(parse_direction(np.int64(3)), Direction.DOWN)

    def test_keys_and_names(self):
        self.assertEqual(parse_direction('ArrowLeft'), Direction.LEFT)
        self.assertEqual(parse_direction('left'), Direction.LEFT)
        self.assertEqual(parse_direction(' Down '), Direction.DOWN)
        self.assertEqual(parse_direction('up'), Direction.UP)

    def test_unknown_symbols(self):
        """
        Anything that is not a direction is ignored.
        """
        for symbol in ('x', 'enter', '', 4, -1, True, None, 1.0, [0]):
            self.assertIsNone(parse_direction(symbol))


if __name__ == '__main__':
    main()
