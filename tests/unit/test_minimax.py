"""
Unit tests for the minimax / alpha-beta search.

Tests verify:
1. Engine finds immediate wins and blocks immediate losses
2. Depth-adjusted scores prefer fast wins and slow losses
3. Depth caps return the static evaluation
4. Tie-breaking keeps the first best move (row-major)
5. Time management aborts cleanly with per-call counters
"""

import numpy as np
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from nxn_tictactoe.engine.minimax import MinimaxEngine, SearchContext, SearchResult
from nxn_tictactoe.game.tictactoe import (
    PLAYER_O,
    PLAYER_X,
    Move,
    apply_move,
    available_moves,
    board_from_rows,
    check_winner,
    empty_board,
    is_legal_move,
)


def count_tree_nodes(board, mover):
    """Size of the full game tree below `board` (no pruning)."""
    if check_winner(board).winner is not None:
        return 1
    total = 1
    for move in available_moves(board):
        total += count_tree_nodes(apply_move(board, move.row, move.col, mover), -mover)
    return total


class TestMinimaxEngine:
    """Search results on small hand-built positions."""

    def test_finds_immediate_win(self):
        engine = MinimaxEngine()
        board = board_from_rows(["XX_", "OO_", "___"])

        result = engine.search(board, PLAYER_X)

        assert result.move == Move(0, 2)
        assert result.score == 9  # Win one ply deep
        assert result.move.score == 9
        assert not result.timed_out

    def test_blocks_opponent_win(self):
        engine = MinimaxEngine()
        # O threatens column 2, X has no winning move
        board = board_from_rows(["_XO", "X_O", "___"])

        result = engine.search(board, PLAYER_X)

        assert result.move == Move(2, 2)
        assert result.score > -8  # Not the immediate-loss score

    def test_prefers_faster_win(self):
        engine = MinimaxEngine()
        # X can win now at (0, 2); other moves only win later
        board = board_from_rows(["XX_", "OO_", "X_O"])

        result = engine.search(board, PLAYER_X)

        assert result.move == Move(0, 2)
        assert result.score == 9

    def test_searching_for_o(self):
        engine = MinimaxEngine()
        board = board_from_rows(["XX_", "OO_", "X__"])

        result = engine.search(board, PLAYER_O)

        assert result.move == Move(1, 2)
        assert result.score == 9

    def test_losing_position_delays_loss(self):
        engine = MinimaxEngine()
        # X has a double threat (row 0 and column 0); O cannot stop both
        board = board_from_rows(["XX_", "XO_", "__O"])

        result = engine.search(board, PLAYER_O)

        # Best O can do is lose after X's next move (ply 2)
        assert result.score == -8
        assert result.move in (Move(0, 2), Move(2, 0))

    def test_full_board_returns_no_move(self):
        engine = MinimaxEngine()
        board = board_from_rows(["XOX", "XOO", "OXX"])

        result = engine.search(board, PLAYER_X)

        assert result.move is None
        assert result.score == 0
        assert result.nodes_searched == 1

    def test_won_board_returns_no_move(self):
        engine = MinimaxEngine()
        board = board_from_rows(["XXX", "OO_", "___"])

        assert engine.search(board, PLAYER_X).score == 10
        assert engine.search(board, PLAYER_O).score == -10
        assert engine.search(board, PLAYER_O).move is None

    def test_depth_cap_returns_static_evaluation(self):
        engine = MinimaxEngine()
        board = apply_move(empty_board(4), 0, 0, PLAYER_X)

        result = engine.search(board, PLAYER_O, max_depth=1)

        # Every reply evaluates to 0; the first one (row-major) is kept
        assert result.move == Move(0, 1)
        assert result.score == 0
        assert result.nodes_searched == 1 + 15

    def test_terminal_at_depth_cap_is_depth_adjusted(self):
        engine = MinimaxEngine()
        board = board_from_rows(["XXX_", "OOO_", "____", "____"])

        result = engine.search(board, PLAYER_X, max_depth=1)

        assert result.move == Move(0, 3)
        assert result.score == 9

    def test_root_moves_restrict_candidates(self):
        engine = MinimaxEngine()
        board = empty_board(3)

        result = engine.search(board, PLAYER_X, root_moves=[Move(1, 1)])

        assert result.move == Move(1, 1)
        assert result.score == 0  # Perfect play from the center is a draw

    def test_tie_break_is_deterministic(self):
        engine = MinimaxEngine()
        board = board_from_rows(["X__", "_O_", "___"])

        first = engine.search(board, PLAYER_X)
        second = engine.search(board, PLAYER_X)

        assert first.move == second.move
        assert first.score == second.score
        assert first.nodes_searched == second.nodes_searched

    def test_alpha_beta_prunes(self):
        engine = MinimaxEngine(time_limit_ms=0)
        board = board_from_rows(["X__", "_O_", "___"])

        result = engine.search(board, PLAYER_X)

        assert result.nodes_searched < count_tree_nodes(board, PLAYER_X)

    def test_evaluate_moves(self):
        engine = MinimaxEngine()
        board = board_from_rows(["XX_", "OO_", "___"])

        scored, ctx = engine.evaluate_moves(board, PLAYER_X)

        assert [(m.row, m.col) for m in scored] == [(0, 2), (1, 2), (2, 0), (2, 1), (2, 2)]
        assert scored[0].score == 9
        assert all(m.score < 9 for m in scored[1:])
        assert ctx.nodes > len(scored)


class TestTimeManagement:
    """Budget abort and per-call counters."""

    def test_abort_keeps_best_so_far(self):
        # Budget already exceeded at the first clock check (second node)
        engine = MinimaxEngine(time_limit_ms=1e-9, check_interval=2)
        board = apply_move(empty_board(4), 0, 0, PLAYER_X)

        result = engine.search(board, PLAYER_O)

        assert result.timed_out
        assert result.move == Move(0, 1)
        assert result.score == 0
        assert result.nodes_searched == 2

    def test_large_search_stops_near_budget(self):
        engine = MinimaxEngine(time_limit_ms=50)
        board = apply_move(empty_board(4), 1, 1, PLAYER_X)

        # Unlimited depth on 4x4 cannot finish in 50ms
        result = engine.search(board, PLAYER_O, max_depth=None)

        assert result.timed_out
        assert result.nodes_searched >= 100
        assert result.move is not None
        assert is_legal_move(board, result.move.row, result.move.col)
        assert result.time_ms < 5000

    def test_no_limit_when_budget_disabled(self):
        engine = MinimaxEngine(time_limit_ms=0)
        board = board_from_rows(["X__", "_O_", "___"])

        result = engine.search(board, PLAYER_X)

        assert not result.timed_out

    def test_counters_reset_between_calls(self):
        engine = MinimaxEngine(time_limit_ms=1e-9, check_interval=2)
        board = apply_move(empty_board(4), 0, 0, PLAYER_X)
        engine.search(board, PLAYER_O)

        # A fresh call starts from a fresh context
        relaxed = MinimaxEngine(time_limit_ms=0)
        result = relaxed.search(board_from_rows(["XX_", "OO_", "___"]), PLAYER_X)
        assert result.nodes_searched < 100
        assert not result.timed_out

        again = engine.search(board, PLAYER_O)
        assert again.nodes_searched == 2

    def test_context_defaults(self):
        ctx = SearchContext()
        assert ctx.nodes == 0
        assert ctx.time_limit_ms == 500
        assert ctx.check_interval == 100
        assert not ctx.stopped
        assert not ctx.time_up()

    def test_contexts_are_independent(self):
        engine = MinimaxEngine()
        a = engine.new_context()
        b = engine.new_context()
        a.nodes += 5
        a.stopped = True
        assert b.nodes == 0
        assert not b.stopped


def test_search_result_metrics():
    result = SearchResult(move=Move(1, 1), score=3, nodes_searched=42, time_ms=7)
    assert result.positions_evaluated == 42
    assert result.as_metrics() == {
        'positions_evaluated': 42,
        'thinking_time': 7,
        'last_move_score': 3,
    }


def test_search_after_win_applies():
    engine = MinimaxEngine()
    board = board_from_rows(["XX_", "OO_", "___"])
    result = engine.search(board, PLAYER_X)

    after = apply_move(board, result.move.row, result.move.col, PLAYER_X)
    assert check_winner(after) == (PLAYER_X, ((0, 0), (0, 1), (0, 2)))
    assert np.count_nonzero(after) == 5
