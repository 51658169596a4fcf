"""
In-memory game session: the human plays one mark, the engine the other.

Tracks the current game, the running score (wins / losses / draws and the
current streak) and a bounded history of finished games. Nothing is
persisted; a front end owns storage and rendering.
"""

import logging
import time
from dataclasses import dataclass, field, replace
from typing import List, Optional

import numpy as np

from nxn_tictactoe.config import SESSION_CONFIG, GameSettings, validate_board_size, validate_difficulty
from nxn_tictactoe.engine.ai import TicTacToeAI
from nxn_tictactoe.engine.minimax import SearchResult
from nxn_tictactoe.game.tictactoe import (
    PLAYER_X,
    IllegalMoveError,
    Line,
    Move,
    apply_move,
    check_winner,
    empty_board,
    get_opponent,
    is_board_full,
)

logger = logging.getLogger(__name__)


@dataclass
class GameState:
    board: np.ndarray
    board_size: int
    current_player: int
    status: str = 'playing'         # playing | won | draw
    winner: Optional[int] = None
    winning_line: Optional[Line] = None
    is_player_turn: bool = True
    difficulty: str = 'easy'


@dataclass
class GameScore:
    player_wins: int = 0
    ai_wins: int = 0
    draws: int = 0
    current_streak: int = 0
    streak_type: Optional[str] = None  # win | loss | draw


@dataclass
class GameRecord:
    moves: List[Move]
    duration_ms: int
    winner: Optional[int]
    difficulty: str
    timestamp: float


class GameSession:
    """
    One player against the engine.

    Move methods return False (or None for the engine) instead of raising
    when called out of turn or after the game ended.
    """

    def __init__(self, settings: Optional[GameSettings] = None, ai: Optional[TicTacToeAI] = None,
                 clock=time.time):
        self.settings = settings or GameSettings()
        self.ai = ai or TicTacToeAI()
        self.clock = clock

        self.score = GameScore()
        self.history: List[GameRecord] = []
        self.last_result: Optional[SearchResult] = None
        self.start_new_game()

    def start_new_game(self):
        self.state = GameState(
            board=empty_board(self.settings.board_size),
            board_size=self.settings.board_size,
            current_player=PLAYER_X,
            is_player_turn=self.settings.player_symbol == PLAYER_X,
            difficulty=self.settings.difficulty,
        )
        self.current_moves: List[Move] = []
        self.last_result = None
        self.started_at = self.clock()

    def make_player_move(self, row: int, col: int) -> bool:
        if self.state.status != 'playing' or not self.state.is_player_turn:
            return False

        try:
            self._play(Move(row, col), self.settings.player_symbol)
        except IllegalMoveError as e:
            logger.warning("Rejected player move: %s", e)
            return False
        return True

    def make_ai_move(self) -> Optional[SearchResult]:
        """Let the engine move. Returns its result, or None if it was not its turn."""
        if self.state.status != 'playing' or self.state.is_player_turn:
            return None

        result = self.ai.choose_move(self.state.board, self.settings.ai_symbol, self.settings.difficulty)
        self.last_result = result
        if result.move is not None:
            self._play(result.move, self.settings.ai_symbol)
        return result

    def _play(self, move: Move, mark: int):
        board = apply_move(self.state.board, move.row, move.col, mark)
        winner, winning_line = check_winner(board)
        is_draw = winner is None and is_board_full(board)

        self.current_moves.append(Move(move.row, move.col))
        self.state = replace(
            self.state,
            board=board,
            current_player=get_opponent(mark),
            status='won' if winner is not None else 'draw' if is_draw else 'playing',
            winner=winner,
            winning_line=winning_line,
            is_player_turn=mark != self.settings.player_symbol,
        )

        if self.state.status != 'playing':
            self._update_score(winner)
            self._save_to_history(winner)

    def _update_score(self, winner: Optional[int]):
        if winner == self.settings.player_symbol:
            outcome = 'win'
            self.score.player_wins += 1
        elif winner == self.settings.ai_symbol:
            outcome = 'loss'
            self.score.ai_wins += 1
        else:
            outcome = 'draw'
            self.score.draws += 1

        if self.score.streak_type == outcome:
            self.score.current_streak += 1
        else:
            self.score.current_streak = 1
        self.score.streak_type = outcome

    def _save_to_history(self, winner: Optional[int]):
        now = self.clock()
        record = GameRecord(
            moves=list(self.current_moves),
            duration_ms=int(round((now - self.started_at) * 1000)),
            winner=winner,
            difficulty=self.settings.difficulty,
            timestamp=now,
        )
        self.history = [record] + self.history[:SESSION_CONFIG['history_limit'] - 1]

    def change_difficulty(self, difficulty: str):
        validate_difficulty(difficulty)
        self.settings = replace(self.settings, difficulty=difficulty)
        self.state.difficulty = difficulty

    def change_board_size(self, board_size: int):
        """Switch size and start a fresh game. Raises InvalidBoardSizeError outside 3..10."""
        validate_board_size(board_size)
        self.settings = replace(self.settings, board_size=board_size)
        self.start_new_game()

    def switch_player_symbol(self):
        player_symbol = get_opponent(self.settings.player_symbol)
        self.settings = replace(self.settings, player_symbol=player_symbol,
                                ai_symbol=get_opponent(player_symbol))
        self.start_new_game()

    def reset_stats(self):
        self.score = GameScore()
        self.history = []

    def get_game_stats(self) -> dict:
        total_games = self.score.player_wins + self.score.ai_wins + self.score.draws
        win_rate = self.score.player_wins / total_games * 100 if total_games > 0 else 0
        average_duration = 0
        if self.history:
            average_duration = round(sum(g.duration_ms for g in self.history) / len(self.history) / 1000)

        return {
            'total_games': total_games,
            'win_rate': round(win_rate, 2),
            'average_game_duration': average_duration,
        }
