"""
Rule-based move selection for boards too large to search.
Uses 1-ply lookahead: win if possible, block if necessary, set up a double
threat, otherwise prefer center and corners.
"""
import numpy as np

from nxn_tictactoe.game.tictactoe import (
    apply_move,
    available_moves,
    check_winner,
    get_center_position,
    get_corner_positions,
    get_opponent,
    is_legal_move,
)


class HeuristicPlayer:
    """
    1-ply heuristic player for N x N tic-tac-toe.

    Strategy (first satisfied rule wins, scores are never blended):
    1. Empty board: take the center
    2. If I can complete a line, do it
    3. If the opponent could complete a line next turn, block it
    4. Play a "strategic" move: one after which at least two different
       follow-ups would each complete a line for me
    5. Center, then a random corner
    6. Otherwise pick a random available move
    """

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def get_action(self, board, player):
        """
        Get the heuristic move for the given position.

        Args:
            board: Current board
            player: Mark making the move

        Returns:
            Move, or None when no empty cell remains
        """
        return self.select(board, player)[0]

    def select(self, board, player):
        """
        Like get_action, but also returns how many candidate positions were
        checked for a completed line.

        Returns:
            (Move or None, positions_checked)
        """
        moves = list(available_moves(board))
        size = board.shape[0]

        if not moves:
            return None, 0

        # 1. Opening move
        if len(moves) == size * size:
            return get_center_position(size), 0

        checked = 0

        # 2. Check if we can win
        for move in moves:
            checked += 1
            if self._wins(board, move, player):
                return move, checked

        # 3. Check if opponent can win (we must block)
        opponent = get_opponent(player)
        for move in moves:
            checked += 1
            if self._wins(board, move, opponent):
                return move, checked

        # 4. Moves that create two winning follow-ups
        strategic, follow_ups = self._strategic_moves(board, player, moves)
        checked += follow_ups
        if strategic:
            return self._choice(strategic), checked

        # 5. Center, then corners
        center = get_center_position(size)
        if is_legal_move(board, center.row, center.col):
            return center, checked

        corners = [c for c in get_corner_positions(size) if is_legal_move(board, c.row, c.col)]
        if corners:
            return self._choice(corners), checked

        # 6. Anything
        return self._choice(moves), checked

    def find_strategic_moves(self, board, player, moves=None):
        """
        Moves after which at least two distinct follow-up moves by `player`
        would each win outright.
        """
        if moves is None:
            moves = list(available_moves(board))
        return self._strategic_moves(board, player, moves)[0]

    def _strategic_moves(self, board, player, moves):
        strategic = []
        checked = 0
        for move in moves:
            next_board = apply_move(board, move.row, move.col, player)
            winning_follow_ups = 0
            for follow_up in available_moves(next_board):
                checked += 1
                if self._wins(next_board, follow_up, player):
                    winning_follow_ups += 1
                    if winning_follow_ups >= 2:
                        strategic.append(move)
                        break
        return strategic, checked

    @staticmethod
    def _wins(board, move, player):
        next_board = apply_move(board, move.row, move.col, player)
        return check_winner(next_board).winner == player

    def _choice(self, moves):
        return moves[int(self.rng.integers(len(moves)))]
