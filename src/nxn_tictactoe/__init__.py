"""
N x N tic-tac-toe (3x3 up to 10x10) with an easy and a hard computer player.
"""

from nxn_tictactoe.game.tictactoe import (
    EMPTY,
    PLAYER_O,
    PLAYER_X,
    IllegalMoveError,
    Move,
    apply_move,
    available_moves,
    check_winner,
    clone_board,
    empty_board,
    evaluate_board,
    generate_lines,
    is_board_full,
    is_game_over,
    is_legal_move,
)
from nxn_tictactoe.engine.ai import TicTacToeAI, choose_move
from nxn_tictactoe.engine.minimax import SearchResult
from nxn_tictactoe.session import GameSession

__version__ = "0.1"

__all__ = [
    'EMPTY',
    'PLAYER_X',
    'PLAYER_O',
    'IllegalMoveError',
    'Move',
    'apply_move',
    'available_moves',
    'check_winner',
    'clone_board',
    'empty_board',
    'evaluate_board',
    'generate_lines',
    'is_board_full',
    'is_game_over',
    'is_legal_move',
    'TicTacToeAI',
    'choose_move',
    'SearchResult',
    'GameSession',
]
