"""
N x N tic-tac-toe rules: board creation, move legality, win/draw detection.
"""

from nxn_tictactoe.game.tictactoe import (
    EMPTY,
    PLAYER_O,
    PLAYER_X,
    SYMBOLS,
    IllegalMoveError,
    Line,
    Move,
    WinnerInfo,
    apply_move,
    available_moves,
    board_from_rows,
    board_from_string,
    board_to_string,
    check_winner,
    clone_board,
    count_marks_in_line,
    empty_board,
    evaluate_board,
    generate_lines,
    get_center_position,
    get_corner_positions,
    get_edge_positions,
    get_opponent,
    is_board_full,
    is_game_over,
    is_legal_move,
    is_line_empty,
    is_winning_position,
)

__all__ = [
    'EMPTY',
    'PLAYER_X',
    'PLAYER_O',
    'SYMBOLS',
    'IllegalMoveError',
    'Line',
    'Move',
    'WinnerInfo',
    'apply_move',
    'available_moves',
    'board_from_rows',
    'board_from_string',
    'board_to_string',
    'check_winner',
    'clone_board',
    'count_marks_in_line',
    'empty_board',
    'evaluate_board',
    'generate_lines',
    'get_center_position',
    'get_corner_positions',
    'get_edge_positions',
    'get_opponent',
    'is_board_full',
    'is_game_over',
    'is_legal_move',
    'is_line_empty',
    'is_winning_position',
]
