#!/usr/bin/env python3
"""
Benchmark: hard-mode search cost per board size.

Plays a few random opening moves on each size, then asks the hard engine
for a move and reports nodes searched, time and whether the budget was hit.
"""

import argparse
import sys
from pathlib import Path

import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from nxn_tictactoe.engine.ai import TicTacToeAI
from nxn_tictactoe.game.tictactoe import (
    PLAYER_X,
    apply_move,
    available_moves,
    board_to_string,
    empty_board,
    get_opponent,
)


def random_position(size, num_moves, rng):
    board = empty_board(size)
    player = PLAYER_X
    for _ in range(num_moves):
        moves = list(available_moves(board))
        move = moves[int(rng.integers(len(moves)))]
        board = apply_move(board, move.row, move.col, player)
        player = get_opponent(player)
    return board, player


def main():
    parser = argparse.ArgumentParser(description="Hard-mode search benchmark")
    parser.add_argument('--sizes', type=int, nargs='+', default=[3, 4, 5, 6, 8, 10])
    parser.add_argument('--opening-moves', type=int, default=2)
    parser.add_argument('--seed', type=int, default=0)
    parser.add_argument('--show-board', action='store_true')
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    ai = TicTacToeAI(rng=rng)

    print("=" * 60)
    print(f"{'size':>4} {'strategy':>22} {'depth':>5} {'nodes':>8} {'ms':>6} {'timeout':>7}")
    print("-" * 60)
    for size in args.sizes:
        board, player = random_position(size, args.opening_moves, rng)
        result = ai.choose_move(board, player, 'hard')
        depth = '-' if result.max_depth is None else result.max_depth
        print(f"{size:>4} {result.strategy:>22} {depth:>5} {result.nodes_searched:>8,} "
              f"{result.time_ms:>6} {str(result.timed_out):>7}")
        if args.show_board:
            print(board_to_string(board))
            print(f"-> {result.move}\n")
    print("=" * 60)


if __name__ == "__main__":
    main()
