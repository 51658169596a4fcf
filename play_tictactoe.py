#!/usr/bin/env python3
"""
Play N x N tic-tac-toe against the computer in the terminal.
"""
import argparse
import logging
import os
import sys
import time
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from nxn_tictactoe.config import BOARD_CONFIG, SESSION_CONFIG, GameSettings, InvalidBoardSizeError
from nxn_tictactoe.game.tictactoe import PLAYER_O, PLAYER_X, SYMBOLS, is_winning_position
from nxn_tictactoe.session import GameSession


def setup_logging():
    log_level = (os.getenv("LOG_LEVEL", "WARNING") or "WARNING").upper()

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(log_level)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    root.addHandler(handler)


def print_board(state):
    """Print the board, winning line in brackets."""
    size = state.board_size
    print("\n    " + " ".join(f"{c:>3}" for c in range(size)))
    print("    " + "-" * (4 * size))
    for row in range(size):
        cells = []
        for col in range(size):
            symbol = SYMBOLS[int(state.board[row, col])]
            if is_winning_position(row, col, state.winning_line):
                symbol = f"[{symbol}]"
            cells.append(f"{symbol:>3}")
        print(f"{row:>2} |" + " ".join(cells))
    print()


def print_metrics(result):
    print(f"   Strategy: {result.strategy}"
          + (f" (depth {result.max_depth})" if result.max_depth else ""))
    print(f"   Score: {result.score}")
    print(f"   Positions evaluated: {result.nodes_searched:,}")
    print(f"   Thinking time: {result.time_ms}ms" + (" (budget hit)" if result.timed_out else ""))


def read_move(session):
    """Prompt until a legal 'row col' is entered. Returns None to quit."""
    size = session.state.board_size
    while True:
        try:
            text = input(f"Enter row and column (0-{size - 1}) or 'q' to quit: ").strip()
        except (EOFError, KeyboardInterrupt):
            return None
        if text.lower() == 'q':
            return None

        parts = text.replace(',', ' ').split()
        if len(parts) != 2 or not all(p.lstrip('-').isdigit() for p in parts):
            print("❌ Invalid input! Enter two numbers, e.g. '1 2'")
            continue

        row, col = int(parts[0]), int(parts[1])
        if session.make_player_move(row, col):
            return row, col
        print(f"❌ Position [{row}, {col}] is not available")


def main():
    parser = argparse.ArgumentParser(description="Play N x N tic-tac-toe against the computer")
    parser.add_argument('--size', type=int, default=BOARD_CONFIG['default_size'],
                        help=f"Board size ({BOARD_CONFIG['min_size']}-{BOARD_CONFIG['max_size']})")
    parser.add_argument('--difficulty', choices=['easy', 'hard'], default='hard')
    parser.add_argument('--play-as', choices=['X', 'O'], default='X', help="X moves first")
    args = parser.parse_args()

    setup_logging()

    player = PLAYER_X if args.play_as == 'X' else PLAYER_O
    try:
        settings = GameSettings(
            difficulty=args.difficulty,
            player_symbol=player,
            ai_symbol=-player,
            board_size=args.size,
        )
    except InvalidBoardSizeError as e:
        parser.error(str(e))

    session = GameSession(settings)

    print("=" * 60)
    print(f"🎮 Tic-Tac-Toe {args.size}x{args.size} - {args.difficulty.upper()} mode")
    print(f"   You are {SYMBOLS[player]}, computer is {SYMBOLS[-player]}")
    print("=" * 60)

    while True:
        while session.state.status == 'playing':
            print_board(session.state)
            if session.state.is_player_turn:
                if read_move(session) is None:
                    print("👋 Thanks for playing!")
                    return
            else:
                print("🤖 Thinking...")
                time.sleep(SESSION_CONFIG['ai_delay_ms'] / 1000)
                result = session.make_ai_move()
                if result.move is not None:
                    print(f"🤖 Computer plays [{result.move.row}, {result.move.col}]")
                print_metrics(result)

        print_board(session.state)
        if session.state.winner == player:
            print("🎉 You win!")
        elif session.state.winner is not None:
            print("🤖 Computer wins!")
        else:
            print("🤝 Draw!")

        score = session.score
        stats = session.get_game_stats()
        print(f"Score - you: {score.player_wins}  computer: {score.ai_wins}  draws: {score.draws}"
              f"  (win rate {stats['win_rate']}%)")

        try:
            again = input("Play again? [y/N] ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            again = ''
        if again != 'y':
            break
        session.start_new_game()


if __name__ == "__main__":
    main()
