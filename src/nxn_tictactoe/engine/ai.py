"""
Move selection for the computer player, with easy and hard difficulty.

    easy  - weighted random: 70% uniform random, otherwise center > corner > random
    hard  - minimax/alpha-beta on boards up to 5x5 (depth capped from 4x4),
            rule-based heuristic from 6x6 up

Every call returns a SearchResult carrying the chosen move (or None) and the
diagnostics shown to the player: nodes visited, elapsed time and score.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from nxn_tictactoe.config import EASY_CONFIG
from nxn_tictactoe.engine.heuristic import HeuristicPlayer
from nxn_tictactoe.engine.minimax import MinimaxEngine, SearchResult
from nxn_tictactoe.engine.strategy import Strategy, select_strategy
from nxn_tictactoe.game.tictactoe import (
    PLAYER_O,
    PLAYER_X,
    Move,
    available_moves,
    check_winner,
    get_center_position,
    get_corner_positions,
    is_legal_move,
)

logger = logging.getLogger(__name__)


@dataclass
class PositionAnalysis:
    evaluation: float
    best_moves: List[Move] = field(default_factory=list)
    strategy: str = ''
    nodes_searched: int = 0


def describe_evaluation(score: float) -> str:
    if score > 5:
        return "Winning position - going for the kill!"
    elif score > 0:
        return "Slight advantage - playing carefully"
    elif score == 0:
        return "Equal position - aiming for draw"
    return "Defending - trying to avoid loss"


class TicTacToeAI:
    """
    Computer player. Holds configuration and a random generator only;
    search counters are created per call by the minimax engine.
    """

    def __init__(self, rng=None, time_limit_ms: Optional[float] = None):
        """
        Args:
            rng: numpy Generator for the randomized strategies (seed it in tests)
            time_limit_ms: Hard-mode search budget (defaults to SEARCH_CONFIG)
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.minimax = MinimaxEngine(time_limit_ms=time_limit_ms)
        self.heuristic = HeuristicPlayer(rng=self.rng)

    def choose_move(
        self,
        board: np.ndarray,
        player: int,
        difficulty: str,
        time_limit_ms: Optional[float] = None
    ) -> SearchResult:
        """
        Pick a move for `player`.

        Returns a result with move=None when the game is already over.
        """
        if player not in (PLAYER_X, PLAYER_O):
            raise ValueError(f"Unknown mark: {player}")

        start = time.perf_counter()
        size = board.shape[0]
        moves = list(available_moves(board))
        plan = select_strategy(difficulty, size, len(moves))
        finished = not moves or check_winner(board).winner is not None

        if plan.strategy == Strategy.WEIGHTED_RANDOM:
            move = None if finished else self.get_easy_move(board, moves)
            result = SearchResult(move=move, score=0, nodes_searched=1, time_ms=0)
        elif finished:
            result = SearchResult(move=None, score=0, nodes_searched=0, time_ms=0)
        elif plan.strategy == Strategy.HEURISTIC:
            move, checked = self.heuristic.select(board, player)
            result = SearchResult(move=move, score=0, nodes_searched=checked, time_ms=0)
        else:
            root_moves = None
            if len(moves) == size * size:
                # Opening: only the center is considered
                root_moves = [get_center_position(size)]
            result = self.minimax.search(
                board, player, plan.max_depth,
                root_moves=root_moves, time_limit_ms=time_limit_ms
            )

        result.strategy = plan.strategy.value
        result.max_depth = plan.max_depth
        result.time_ms = int(round((time.perf_counter() - start) * 1000))

        logger.debug(
            "AI (%s/%s) move=%s score=%s nodes=%d time=%dms%s",
            difficulty.upper(), result.strategy,
            f"[{result.move.row}, {result.move.col}]" if result.move else "none",
            result.score, result.nodes_searched, result.time_ms,
            " (timed out)" if result.timed_out else "",
        )
        return result

    def get_easy_move(self, board: np.ndarray, moves: Optional[List[Move]] = None) -> Optional[Move]:
        """Random moves with a mild preference for center and corners."""
        if moves is None:
            moves = list(available_moves(board))
        if not moves:
            return None

        if self.rng.random() < EASY_CONFIG['random_move_probability']:
            return self._choice(moves)

        size = board.shape[0]
        center = get_center_position(size)
        if is_legal_move(board, center.row, center.col):
            return center

        corners = [c for c in get_corner_positions(size) if is_legal_move(board, c.row, c.col)]
        if corners:
            return self._choice(corners)

        return self._choice(moves)

    def analyze_position(self, board: np.ndarray, player: int) -> PositionAnalysis:
        """
        Score every available move for `player` and summarize the position.

        Uses the hard-mode depth cap for the board size; sizes that skip
        minimax in play are analysed one reply deep.
        """
        moves = list(available_moves(board))
        if not moves or check_winner(board).winner is not None:
            return PositionAnalysis(evaluation=0, strategy="Game over")

        plan = select_strategy('hard', board.shape[0], len(moves))
        max_depth = plan.max_depth if plan.uses_search else 2
        scored, ctx = self.minimax.evaluate_moves(board, player, max_depth)

        best_score = max(move.score for move in scored)
        best_moves = [move for move in scored if move.score == best_score]

        return PositionAnalysis(
            evaluation=best_score,
            best_moves=best_moves,
            strategy=describe_evaluation(best_score),
            nodes_searched=ctx.nodes,
        )

    def _choice(self, moves):
        return moves[int(self.rng.integers(len(moves)))]


def choose_move(board, player, difficulty, rng=None, time_limit_ms=None) -> SearchResult:
    """Stateless convenience wrapper: a fresh TicTacToeAI per call."""
    return TicTacToeAI(rng=rng, time_limit_ms=time_limit_ms).choose_move(board, player, difficulty)
