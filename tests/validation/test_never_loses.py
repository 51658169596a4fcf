"""
Hard mode on 3x3 never loses.

Walks every line of play the opponent can choose while the hard player
answers with its own move, and checks no branch ends in a hard-mode loss.
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from nxn_tictactoe.engine.ai import TicTacToeAI
from nxn_tictactoe.game.tictactoe import (
    PLAYER_O,
    PLAYER_X,
    apply_move,
    available_moves,
    check_winner,
    empty_board,
    get_opponent,
    is_board_full,
)


def worst_outcome(board, to_move, hard_mark, ai, cache):
    """+1 hard win, 0 draw, -1 hard loss, assuming the opponent plays anything."""
    winner = check_winner(board).winner
    if winner is not None:
        return 1 if winner == hard_mark else -1
    if is_board_full(board):
        return 0

    if to_move == hard_mark:
        key = board.tobytes()
        if key not in cache:
            cache[key] = ai.choose_move(board, hard_mark, 'hard').move
        move = cache[key]
        child = apply_move(board, move.row, move.col, hard_mark)
        return worst_outcome(child, get_opponent(to_move), hard_mark, ai, cache)

    return min(
        worst_outcome(apply_move(board, m.row, m.col, to_move), get_opponent(to_move), hard_mark, ai, cache)
        for m in available_moves(board)
    )


@pytest.mark.parametrize("hard_mark", [PLAYER_X, PLAYER_O])
def test_hard_never_loses_3x3(hard_mark):
    # No budget so a slow machine cannot turn a timeout into a blunder
    ai = TicTacToeAI(time_limit_ms=0)

    assert worst_outcome(empty_board(3), PLAYER_X, hard_mark, ai, {}) >= 0


def test_hard_vs_hard_is_a_draw():
    ai = TicTacToeAI()
    board = empty_board(3)
    player = PLAYER_X

    while check_winner(board).winner is None and not is_board_full(board):
        move = ai.choose_move(board, player, 'hard').move
        board = apply_move(board, move.row, move.col, player)
        player = get_opponent(player)

    assert check_winner(board).winner is None
    assert is_board_full(board)
